import asyncio
import base64
import io
from collections.abc import Awaitable, Callable

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from medrecords.extraction.base import BaseExtractor
from medrecords.extraction.models import Examination
from medrecords.processor.models import RawFile


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF resembling an examination report."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.drawString(72, 720, "Muayene Raporu - Dahiliye")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.drawString(72, 720, "Page one")
    c.showPage()
    c.drawString(72, 720, "Page two")
    c.save()
    return buf.getvalue()


class NameKeyedLoader:
    """File loader stand-in: the payload is the base64 of the file name, no disk access."""

    async def load(self, raw_file: RawFile) -> str:
        return base64.b64encode(raw_file.name.encode()).decode("ascii")


class GatedExtractor(BaseExtractor):
    """Extractor whose calls block until the test opens the gate for that file name."""

    def __init__(self) -> None:
        self.responses: dict[str, list[Examination] | Exception] = {}
        self.started: list[str] = []
        self._gates: dict[str, asyncio.Event] = {}

    def gate(self, name: str) -> asyncio.Event:
        return self._gates.setdefault(name, asyncio.Event())

    def release(self, *names: str) -> None:
        for name in names:
            self.gate(name).set()

    async def extract(self, payload: str, media_type: str) -> list[Examination]:
        name = base64.b64decode(payload).decode()
        self.started.append(name)
        await self.gate(name).wait()
        response = self.responses.get(name, [])
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture()
def name_keyed_loader() -> NameKeyedLoader:
    return NameKeyedLoader()


@pytest.fixture()
def gated_extractor() -> GatedExtractor:
    return GatedExtractor()


@pytest.fixture()
def settle() -> Callable[..., Awaitable[None]]:
    """Yield to the event loop until ``predicate()`` holds (bounded)."""

    async def _settle(predicate: Callable[[], bool] = lambda: False) -> None:
        for _ in range(200):
            if predicate():
                return
            await asyncio.sleep(0)

    return _settle
