from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from medrecords.export.base import BaseTableWriter
from medrecords.export.flatten import COLUMNS, FlatRow

# character widths, in COLUMNS order
_COLUMN_WIDTHS = (20, 10, 15, 30, 40, 10, 15, 15, 40)


class XlsxTableWriter(BaseTableWriter):
    """Writes rows to a single-sheet Excel workbook using openpyxl."""

    extension = ".xlsx"

    def __init__(self, sheet_name: str = "Tıbbi Kayıtlar") -> None:
        self._sheet_name = sheet_name

    def write(self, rows: Sequence[FlatRow], destination: Path) -> None:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = self._sheet_name
        sheet.append(list(COLUMNS))
        for row in rows:
            sheet.append([getattr(row, column) for column in COLUMNS])
        for index, width in enumerate(_COLUMN_WIDTHS, start=1):
            sheet.column_dimensions[get_column_letter(index)].width = width
        workbook.save(destination)
