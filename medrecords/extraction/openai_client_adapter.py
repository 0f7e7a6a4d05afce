import asyncio
import base64
import binascii

import httpx
import openai

from medrecords.extraction.client_base import BaseExtractionClient
from medrecords.extraction.exceptions import ExtractionError, ExtractionNetworkError
from medrecords.pdf.base import BasePdfRasterizer
from medrecords.pdf.exceptions import PdfRenderError

PDF_MEDIA_TYPE = "application/pdf"


class OpenAIClientAdapter(BaseExtractionClient):
    """Extraction client built on the OpenAI-compatible chat completions API.

    Images are sent as data URLs. PDFs are sent as a file part, or, when a
    rasterizer is given, as one PNG image per page for providers that only
    accept images.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        pdf_rasterizer: BasePdfRasterizer | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )
        self._pdf_rasterizer = pdf_rasterizer

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
        content: list[dict[str, object]] = [{"type": "text", "text": prompt}]
        content.extend(await self._document_parts(payload, media_type))
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "examinations",
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=[{"role": "user", "content": content}],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ExtractionNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ExtractionNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ExtractionError("AI returned no choices")
        text = response.choices[0].message.content
        if text is None:
            raise ExtractionError("AI returned empty response")
        return text

    async def _document_parts(self, payload: str, media_type: str) -> list[dict[str, object]]:
        if media_type.lower() != PDF_MEDIA_TYPE:
            return [_image_part(payload, media_type)]
        if self._pdf_rasterizer is None:
            return [
                {
                    "type": "file",
                    "file": {
                        "filename": "document.pdf",
                        "file_data": f"data:{PDF_MEDIA_TYPE};base64,{payload}",
                    },
                }
            ]
        try:
            pdf_bytes = base64.b64decode(payload, validate=True)
        except binascii.Error as exc:
            raise ExtractionError(f"Invalid base64 payload: {exc}") from exc
        try:
            pages = await asyncio.to_thread(self._pdf_rasterizer.render_pages, pdf_bytes)
        except PdfRenderError as exc:
            raise ExtractionError(str(exc)) from exc
        return [
            _image_part(base64.b64encode(page).decode("ascii"), "image/png") for page in pages
        ]


def _image_part(payload: str, media_type: str) -> dict[str, object]:
    return {
        "type": "image_url",
        "image_url": {"url": f"data:{media_type};base64,{payload}"},
    }
