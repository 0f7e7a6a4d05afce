from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from medrecords.export.flatten import FlatRow


class BaseTableWriter(ABC):
    """Contract for all tabular-file writers."""

    extension: str = ""

    @abstractmethod
    def write(self, rows: Sequence[FlatRow], destination: Path) -> None:
        """Write all rows, header first, to ``destination``.

        Raises:
            OSError: if the file cannot be written.
        """
