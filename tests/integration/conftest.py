import base64
from pathlib import Path

import pytest

from medrecords.extraction.client_base import BaseExtractionClient
from medrecords.extraction.example_client_adapter import ExampleClientAdapter
from medrecords.extraction.exceptions import ExtractionNetworkError

RAPOR_RESPONSE: dict[str, object] = {
    "examinations": [
        {
            "yas": "34",
            "muayeneSaati": "10:15",
            "uzmanlikServis": "Dahiliye",
            "sikayet": "Baş ağrısı",
            "tanilar": [
                {"sira": "1", "konu": "R51", "taniTuru": "Ön Tanı", "taniAdi": "Migren"},
            ],
        }
    ]
}

FAILING_CONTENT = b"QUOTA"


class QuotaAwareClient(BaseExtractionClient):
    """Fails for documents whose bytes are FAILING_CONTENT, answers the rest."""

    def __init__(self, response: dict[str, object]) -> None:
        self._delegate = ExampleClientAdapter(response)
        self.calls: list[str] = []

    async def generate(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        payload: str,
        media_type: str,
        json_schema: dict[str, object],
    ) -> str:
        self.calls.append(media_type)
        if base64.b64decode(payload) == FAILING_CONTENT:
            raise ExtractionNetworkError("quota exceeded")
        return await self._delegate.generate(
            model=model,
            temperature=temperature,
            prompt=prompt,
            payload=payload,
            media_type=media_type,
            json_schema=json_schema,
        )


@pytest.fixture()
def quota_client() -> QuotaAwareClient:
    return QuotaAwareClient(RAPOR_RESPONSE)


@pytest.fixture()
def upload_dir(tmp_path: Path, sample_pdf_bytes: bytes) -> Path:
    """A directory holding one readable report, one quota-failing PDF and a text file."""
    uploads = tmp_path / "uploads"
    uploads.mkdir()
    (uploads / "rapor.pdf").write_bytes(sample_pdf_bytes)
    (uploads / "kota.pdf").write_bytes(FAILING_CONTENT)
    (uploads / "notlar.txt").write_text("not a report", encoding="utf-8")
    return uploads


@pytest.fixture()
def rapor_response() -> dict[str, object]:
    return RAPOR_RESPONSE
