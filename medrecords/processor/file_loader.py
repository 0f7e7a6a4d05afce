import asyncio
import base64

from medrecords.processor.exceptions import FileReadError
from medrecords.processor.models import RawFile


class FileLoader:
    """Reads a submitted file's bytes and encodes them for transport."""

    async def load(self, raw_file: RawFile) -> str:
        """Return the file content as base64 text.

        The read runs in a worker thread so sibling pipelines keep running.

        Raises:
            FileReadError: if the file is missing, unreadable or empty.
        """
        try:
            raw_bytes = await asyncio.to_thread(raw_file.path.read_bytes)
        except OSError as exc:
            raise FileReadError(f"Cannot read {raw_file.name}: {exc}") from exc
        if not raw_bytes:
            raise FileReadError(f"{raw_file.name} is empty")
        return base64.b64encode(raw_bytes).decode("ascii")
