"""The single owner of per-file results.

Every operation here completes without awaiting, so under asyncio no other
coroutine can observe a half-applied mutation.
"""

import dataclasses
from collections.abc import Iterable

from medrecords.logging.logger import Log
from medrecords.preview.exceptions import HandleReleasedError
from medrecords.processor.exceptions import DuplicateResultError, StatusTransitionError
from medrecords.processor.models import (
    ALLOWED_TRANSITIONS,
    ExtractionSucceeded,
    FileResult,
    FileStatus,
    PipelineOutcome,
)


class ResultCollection:
    """Ordered id -> FileResult mapping; the only place preview handles are released."""

    def __init__(self) -> None:
        self._results: dict[str, FileResult] = {}

    def insert_placeholder(self, result: FileResult) -> None:
        """Append a freshly admitted result at the end."""
        if result.id in self._results:
            raise DuplicateResultError(f"Result {result.id} already in collection")
        self._results[result.id] = result
        Log.debug("Inserted placeholder", result_id=result.id, file_name=result.file_name)

    def merge(self, result_id: str, outcome: PipelineOutcome) -> bool:
        """Apply a pipeline outcome to the stored entry.

        Only status, examinations and error_message change; id, name, handle
        and media type always come from the stored entry. Returns False (and
        does nothing) when the entry was removed in the meantime.
        """
        existing = self._results.get(result_id)
        if existing is None:
            Log.debug("Discarding late outcome for removed result", result_id=result_id)
            return False
        self._check_transition(existing, outcome.status)
        if isinstance(outcome, ExtractionSucceeded):
            examinations, error_message = list(outcome.examinations), None
        else:
            examinations, error_message = [], outcome.error_message
        merged = dataclasses.replace(
            existing,
            status=outcome.status,
            examinations=examinations,
            error_message=error_message,
        )
        self._results[result_id] = merged
        Log.info("Merged result", result_id=result_id, status=merged.status)
        return True

    def advance(self, result_id: str, status: FileStatus) -> bool:
        """Move an entry to a payload-free status (pending -> processing)."""
        existing = self._results.get(result_id)
        if existing is None:
            return False
        self._check_transition(existing, status)
        self._results[result_id] = dataclasses.replace(existing, status=status)
        return True

    def remove_by_id(self, result_id: str) -> bool:
        """Release the entry's handle and drop it; no-op when absent."""
        # detach first: a re-entrant call for the same id then finds nothing
        result = self._results.pop(result_id, None)
        if result is None:
            return False
        self._release(result)
        Log.info("Removed result", result_id=result_id, file_name=result.file_name)
        return True

    def remove_many(self, result_ids: Iterable[str]) -> int:
        """Remove every listed id; returns how many were present."""
        return sum(1 for result_id in set(result_ids) if self.remove_by_id(result_id))

    def clear(self) -> int:
        """Release every handle and empty the collection."""
        results, self._results = self._results, {}
        for result in results.values():
            self._release(result)
        Log.info(f"Cleared {len(results)} results")
        return len(results)

    def snapshot(self) -> list[FileResult]:
        """Entries in admission order. Entries are immutable; the list is a copy."""
        return list(self._results.values())

    def get(self, result_id: str) -> FileResult | None:
        return self._results.get(result_id)

    def __contains__(self, result_id: object) -> bool:
        return result_id in self._results

    def __len__(self) -> int:
        return len(self._results)

    @staticmethod
    def _release(result: FileResult) -> None:
        # a handle released behind our back must not stop a bulk removal
        try:
            result.file_handle.release()
        except HandleReleasedError as exc:
            Log.warning("Preview handle already released", result_id=result.id, error=exc)

    @staticmethod
    def _check_transition(existing: FileResult, status: FileStatus) -> None:
        if status not in ALLOWED_TRANSITIONS[existing.status]:
            raise StatusTransitionError(
                f"Result {existing.id}: cannot move from {existing.status} to {status}"
            )
