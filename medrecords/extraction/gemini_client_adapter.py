import base64
import binascii

import httpx
from google import genai
from google.genai import errors, types

from medrecords.extraction.client_base import BaseExtractionClient
from medrecords.extraction.exceptions import ExtractionError, ExtractionNetworkError


class GeminiClientAdapter(BaseExtractionClient):
    """Extraction client for Google Gemini; documents are sent as inline bytes."""

    def __init__(self, *, api_key: str, timeout_seconds: int) -> None:
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=timeout_seconds * 1000),
        )

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
        try:
            document = base64.b64decode(payload, validate=True)
        except binascii.Error as exc:
            raise ExtractionError(f"Invalid base64 payload: {exc}") from exc

        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=[
                    types.Part.from_bytes(data=document, mime_type=media_type),
                    prompt,
                ],
                config=types.GenerateContentConfig(
                    temperature=temperature,
                    response_mime_type="application/json",
                    response_json_schema=json_schema,
                ),
            )
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ExtractionNetworkError(f"AI provider network error: {exc}") from exc
        except errors.APIError as exc:
            raise ExtractionNetworkError(f"AI provider API error: {exc}") from exc

        text = response.text
        if not text:
            raise ExtractionError("AI returned empty response")
        return text
