from collections.abc import Iterable, Sequence
from pathlib import Path

from medrecords.collection.result_collection import ResultCollection
from medrecords.config.settings import Settings
from medrecords.export.exporter import Exporter
from medrecords.export.factory import TableWriterFactory
from medrecords.extraction.factory import ExtractorFactory
from medrecords.logging.logger import Log
from medrecords.preview.handles import PreviewRegistry
from medrecords.processor.models import FileResult, FileStatus, RawFile
from medrecords.processor.orchestrator import BatchOrchestrator, BatchSubmission
from medrecords.processor.processor import build_processor
from medrecords.query.filter import filter_results


class Workbench:
    """Admission surface for a UI or CLI.

    Destructive calls (delete_one, delete_many, delete_filtered, clear_all)
    act immediately; asking the user for confirmation is the caller's job.
    """

    def __init__(
        self,
        collection: ResultCollection,
        orchestrator: BatchOrchestrator,
        exporter: Exporter,
    ) -> None:
        self._collection = collection
        self._orchestrator = orchestrator
        self._exporter = exporter
        self._query = ""

    @property
    def query(self) -> str:
        return self._query

    def submit_files(self, files: Sequence[RawFile]) -> BatchSubmission:
        return self._orchestrator.submit(files)

    async def drain(self) -> None:
        await self._orchestrator.drain()

    def delete_one(self, result_id: str) -> bool:
        return self._collection.remove_by_id(result_id)

    def delete_many(self, result_ids: Iterable[str]) -> int:
        return self._collection.remove_many(result_ids)

    def delete_filtered(self) -> int:
        """Delete every result matched by the current query."""
        return self.delete_many(result.id for result in self.filtered())

    def clear_all(self) -> int:
        self._query = ""
        return self._collection.clear()

    def set_query(self, text: str) -> None:
        self._query = text

    def filtered(self) -> list[FileResult]:
        return filter_results(self._collection.snapshot(), self._query)

    def get_snapshot(self) -> list[FileResult]:
        return self._collection.snapshot()

    def export_now(self, destination: Path | None = None) -> int:
        return self._exporter.export(self._collection.snapshot(), destination)

    def is_batch_in_flight(self) -> bool:
        return self._orchestrator.is_batch_in_flight()

    def success_count(self) -> int:
        return sum(
            1 for result in self._collection.snapshot() if result.status == FileStatus.SUCCESS
        )

    def preview_path(self, result_id: str) -> Path | None:
        """Resolve a result's preview handle to the original file."""
        result = self._collection.get(result_id)
        if result is None:
            return None
        return result.file_handle.resolve()

    def close(self) -> None:
        """Tear down: release every remaining preview handle."""
        released = self._collection.clear()
        Log.debug(f"Workbench closed, released {released} handles")


def build_workbench(settings: Settings) -> Workbench:
    """Build a Workbench with the configured extractor and table writer."""
    collection = ResultCollection()
    processor = build_processor(ExtractorFactory.create(settings))
    orchestrator = BatchOrchestrator(collection, processor, PreviewRegistry())
    writer = TableWriterFactory.create(settings)
    destination = Path(settings.export_file_name).with_suffix(writer.extension)
    return Workbench(collection, orchestrator, Exporter(writer, destination))
