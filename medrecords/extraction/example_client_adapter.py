"""Offline extraction client.

Returns a fixed, schema-valid response without any network call. Useful for
local development and tests, and as a template for new provider adapters:
implement BaseExtractionClient and register the provider in ExtractorFactory.
"""

import json
from typing import ClassVar

from medrecords.extraction.client_base import BaseExtractionClient


class ExampleClientAdapter(BaseExtractionClient):
    """Answers every document with the same single examination."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "examinations": [
            {
                "yas": "",
                "muayeneSaati": "",
                "uzmanlikServis": "",
                "sikayet": "",
                "tanilar": [],
            }
        ],
    }

    def __init__(self, response: dict[str, object] | None = None) -> None:
        self._response = response if response is not None else self.DEFAULT_RESPONSE

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
        _ = model, temperature, prompt, payload, media_type, json_schema
        return json.dumps(self._response, ensure_ascii=False)
