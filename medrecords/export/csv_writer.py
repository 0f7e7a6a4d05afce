import csv
from collections.abc import Sequence
from pathlib import Path

from medrecords.export.base import BaseTableWriter
from medrecords.export.flatten import COLUMNS, FlatRow


class CsvTableWriter(BaseTableWriter):
    """Writes rows as UTF-8 CSV with a BOM so spreadsheet apps detect the encoding."""

    extension = ".csv"

    def write(self, rows: Sequence[FlatRow], destination: Path) -> None:
        with destination.open("w", encoding="utf-8-sig", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=COLUMNS)
            writer.writeheader()
            writer.writerows(row.as_dict() for row in rows)
