from medrecords.extraction.base import BaseExtractor
from medrecords.logging.logger import Log
from medrecords.processor.file_loader import FileLoader
from medrecords.processor.pipeline import PipelineContext, PipelineStep


class LoadFileStep(PipelineStep):
    def __init__(self, file_loader: FileLoader) -> None:
        self._file_loader = file_loader

    async def run(self, context: PipelineContext) -> PipelineContext:
        context.payload = await self._file_loader.load(context.raw_file)
        Log.info(
            f"Loaded {context.raw_file.name} for result {context.result_id} "
            f"({len(context.payload)} base64 chars)"
        )
        return context


class ExtractExaminationsStep(PipelineStep):
    def __init__(self, extractor: BaseExtractor) -> None:
        self._extractor = extractor

    async def run(self, context: PipelineContext) -> PipelineContext:
        if not context.payload:
            raise ValueError("PipelineContext.payload must be set before extraction")
        context.examinations = await self._extractor.extract(
            context.payload, context.raw_file.media_type
        )
        Log.info(
            f"Extracted {len(context.examinations)} examinations from "
            f"{context.raw_file.name} (result {context.result_id})"
        )
        return context
