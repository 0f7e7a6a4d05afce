from medrecords.extraction.base import BaseExtractor
from medrecords.logging.logger import Log
from medrecords.processor.file_loader import FileLoader
from medrecords.processor.models import (
    ExtractionFailed,
    ExtractionSucceeded,
    PipelineOutcome,
    RawFile,
)
from medrecords.processor.pipeline import PipelineContext, PipelineStep
from medrecords.processor.steps import ExtractExaminationsStep, LoadFileStep

UNKNOWN_ERROR_MESSAGE = "Bilinmeyen hata"


class Processor:
    """Drives one file through the pipeline steps: load -> extract.

    Never raises for a per-file failure; the failure becomes the outcome.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    async def process(self, result_id: str, raw_file: RawFile) -> PipelineOutcome:
        """Run every step for a single file and return its outcome."""
        Log.info("Processing file", result_id=result_id, file_name=raw_file.name)
        context = PipelineContext(result_id=result_id, raw_file=raw_file)
        try:
            for step in self._steps:
                context = await step.run(context)
        except Exception as exc:
            message = str(exc) or UNKNOWN_ERROR_MESSAGE
            Log.error(
                f"Extraction failed: {message}", result_id=result_id, file_name=raw_file.name
            )
            return ExtractionFailed(error_message=message)
        return ExtractionSucceeded(examinations=context.examinations)


def build_processor(extractor: BaseExtractor, file_loader: FileLoader | None = None) -> Processor:
    """Build a Processor with the standard load -> extract steps."""
    return Processor(
        steps=[
            LoadFileStep(file_loader or FileLoader()),
            ExtractExaminationsStep(extractor),
        ]
    )
