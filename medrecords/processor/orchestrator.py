import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from medrecords.collection.result_collection import ResultCollection
from medrecords.logging.logger import Log
from medrecords.preview.handles import PreviewRegistry
from medrecords.processor.exceptions import UnsupportedMediaTypeError, ValidationError
from medrecords.processor.ids import new_id
from medrecords.processor.models import (
    FileResult,
    FileStatus,
    RawFile,
    is_supported_media_type,
)
from medrecords.processor.processor import Processor


@dataclass(frozen=True)
class RejectedFile:
    """A submitted file that was refused at admission."""

    name: str
    media_type: str
    reason: str


@dataclass
class BatchSubmission:
    """What submit() admitted, what it refused, and the task running the batch."""

    result_ids: list[str]
    task: asyncio.Task[None]
    rejected: list[RejectedFile] = field(default_factory=list)


class BatchOrchestrator:
    """Admits batches of files and runs one pipeline per file concurrently.

    Placeholders for the whole batch are in the collection before submit()
    returns; each pipeline merges its own outcome as soon as it finishes.
    """

    def __init__(
        self,
        collection: ResultCollection,
        processor: Processor,
        previews: PreviewRegistry,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self._collection = collection
        self._processor = processor
        self._previews = previews
        self._id_factory = id_factory
        self._in_flight = 0
        self._tasks: set[asyncio.Task[None]] = set()

    def submit(self, files: Sequence[RawFile]) -> BatchSubmission:
        """Admit supported files and start their pipelines.

        Must be called from a running event loop. Nothing is awaited here, so
        the placeholders are visible to the caller immediately.

        Raises:
            ValidationError: if ``files`` is empty.
            UnsupportedMediaTypeError: if no file has a supported media type.
        """
        if not files:
            raise ValidationError("No files submitted")
        accepted, rejected = self._partition(files)
        if not accepted:
            raise UnsupportedMediaTypeError([r.name for r in rejected])

        admitted = [(self._admit(raw_file), raw_file) for raw_file in accepted]
        for result_id, _ in admitted:
            self._collection.advance(result_id, FileStatus.PROCESSING)
        self._in_flight += len(admitted)
        Log.info(f"Admitted {len(admitted)} files, rejected {len(rejected)}")

        task = asyncio.get_running_loop().create_task(self._run_batch(admitted))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return BatchSubmission(
            result_ids=[result_id for result_id, _ in admitted],
            task=task,
            rejected=rejected,
        )

    async def run(self, files: Sequence[RawFile]) -> BatchSubmission:
        """Submit a batch and wait until every file in it is merged or discarded."""
        submission = self.submit(files)
        await submission.task
        return submission

    async def drain(self) -> None:
        """Wait for every batch submitted so far, including ones started meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def is_batch_in_flight(self) -> bool:
        return self._in_flight > 0

    def _partition(
        self, files: Sequence[RawFile]
    ) -> tuple[list[RawFile], list[RejectedFile]]:
        accepted: list[RawFile] = []
        rejected: list[RejectedFile] = []
        for raw_file in files:
            if is_supported_media_type(raw_file.media_type):
                accepted.append(raw_file)
                continue
            Log.warning(
                "Rejected unsupported file",
                file_name=raw_file.name,
                media_type=raw_file.media_type,
            )
            rejected.append(
                RejectedFile(
                    name=raw_file.name,
                    media_type=raw_file.media_type,
                    reason=f"unsupported media type {raw_file.media_type}",
                )
            )
        return accepted, rejected

    def _admit(self, raw_file: RawFile) -> str:
        handle = self._previews.create(raw_file.path)
        result = FileResult(
            id=self._id_factory(),
            file_name=raw_file.name,
            file_handle=handle,
            media_type=raw_file.media_type,
        )
        try:
            self._collection.insert_placeholder(result)
        except Exception:
            handle.release()
            raise
        return result.id

    async def _run_batch(self, admitted: list[tuple[str, RawFile]]) -> None:
        await asyncio.gather(
            *(self._run_one(result_id, raw_file) for result_id, raw_file in admitted)
        )
        Log.info(f"Batch of {len(admitted)} files finished")

    async def _run_one(self, result_id: str, raw_file: RawFile) -> None:
        try:
            outcome = await self._processor.process(result_id, raw_file)
            if not self._collection.merge(result_id, outcome):
                Log.info(
                    "Result was removed; outcome discarded",
                    result_id=result_id,
                    file_name=raw_file.name,
                )
        finally:
            self._in_flight -= 1
