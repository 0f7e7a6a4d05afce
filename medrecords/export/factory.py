from medrecords.config.settings import Settings
from medrecords.export.base import BaseTableWriter
from medrecords.export.csv_writer import CsvTableWriter
from medrecords.export.xlsx_writer import XlsxTableWriter


class TableWriterFactory:
    """Creates the table writer for the configured export format."""

    FORMATS: tuple[str, ...] = ("xlsx", "csv")

    @classmethod
    def create(cls, settings: Settings) -> BaseTableWriter:
        export_format = settings.export_format.lower()
        if export_format == "xlsx":
            return XlsxTableWriter(sheet_name=settings.export_sheet_name)
        if export_format == "csv":
            return CsvTableWriter()
        raise ValueError(
            f"Unknown export format '{export_format}'. Choose from: {list(cls.FORMATS)}"
        )
