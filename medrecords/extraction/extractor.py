"""AI-powered examination extractor."""

import json
import re
from pathlib import Path
from typing import Any

from medrecords.extraction.base import BaseExtractor
from medrecords.extraction.client_base import BaseExtractionClient
from medrecords.extraction.exceptions import ExtractionError
from medrecords.extraction.models import Examination
from medrecords.extraction.prompt_loader import load_json_schema, load_prompt_template
from medrecords.extraction.validator import validate_and_build
from medrecords.logging.logger import Log

# a whole response wrapped in ```json ... ```
_CODE_FENCE = re.compile(r"^```[\w-]*\s*(.*?)\s*```$", re.DOTALL)


class Extractor(BaseExtractor):
    """Extracts examination records from a document using a multimodal AI provider."""

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        temperature: float = 0.1,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        schema_str = load_json_schema(json_schema_path)
        self._json_schema_dict = json.loads(schema_str)
        self._prompt = load_prompt_template(prompt_template_path).format(
            json_schema=schema_str,
        )

    async def extract(self, payload: str, media_type: str) -> list[Examination]:
        """Send the document to the provider and validate its answer."""
        Log.debug(f"Extraction prompt:\n{self._prompt}")
        raw_response = await self._client.generate(
            model=self._model,
            temperature=self._temperature,
            prompt=self._prompt,
            payload=payload,
            media_type=media_type,
            json_schema=self._json_schema_dict,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        examinations = validate_and_build(self._parse_json(raw_response))
        Log.info(f"Extraction complete: {len(examinations)} examinations extracted")
        return examinations

    @staticmethod
    def _parse_json(raw: str) -> Any:
        cleaned = raw.strip()
        fenced = _CODE_FENCE.match(cleaned)
        if fenced:
            cleaned = fenced.group(1).strip()
        if not cleaned:
            raise ExtractionError("AI returned empty response")

        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ExtractionError(f"Invalid JSON response: {exc}") from exc
