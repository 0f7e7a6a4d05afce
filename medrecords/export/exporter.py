from collections.abc import Sequence
from pathlib import Path

from medrecords.export.base import BaseTableWriter
from medrecords.export.flatten import flatten
from medrecords.logging.logger import Log
from medrecords.processor.models import FileResult, FileStatus


class Exporter:
    """Flattens a snapshot and hands every row to the table writer in one call."""

    def __init__(self, writer: BaseTableWriter, default_destination: Path) -> None:
        self._writer = writer
        self._default_destination = default_destination

    def export(self, snapshot: Sequence[FileResult], destination: Path | None = None) -> int:
        """Export successful results; returns the number of rows written.

        Nothing is written when no result has succeeded.
        """
        if not any(result.status == FileStatus.SUCCESS for result in snapshot):
            Log.warning("Export skipped: no successful results")
            return 0
        rows = flatten(snapshot)
        target = destination or self._default_destination
        self._writer.write(rows, target)
        Log.info(f"Exported {len(rows)} rows to {target}")
        return len(rows)
