"""Tests for prompt template and JSON schema loading."""

import json
from pathlib import Path

import pytest

from medrecords.extraction.exceptions import ExtractionError
from medrecords.extraction.prompt_loader import load_json_schema, load_prompt_template


class TestLoadPromptTemplate:
    def test_loads_default_template(self) -> None:
        template = load_prompt_template()
        assert "{json_schema}" in template
        assert "taniAdi" in template

    def test_default_template_formats_cleanly(self) -> None:
        rendered = load_prompt_template().format(json_schema="SCHEMA")
        assert rendered.rstrip().endswith("SCHEMA")

    def test_loads_custom_template(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom.txt"
        custom.write_text("Extract {json_schema}", encoding="utf-8")
        assert load_prompt_template(custom) == "Extract {json_schema}"

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(ExtractionError, match="Failed to load prompt"):
            load_prompt_template(Path("/nonexistent/file.txt"))


class TestLoadJsonSchema:
    def test_default_schema_is_valid_json(self) -> None:
        schema = json.loads(load_json_schema())
        assert schema["required"] == ["examinations"]
        exam = schema["properties"]["examinations"]["items"]
        assert set(exam["required"]) == {"yas", "muayeneSaati", "uzmanlikServis", "sikayet", "tanilar"}

    def test_loads_custom_schema(self, tmp_path: Path) -> None:
        custom = tmp_path / "schema.json"
        custom.write_text('{"type": "array"}', encoding="utf-8")
        assert load_json_schema(custom) == '{"type": "array"}'

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(ExtractionError, match="Failed to load JSON schema"):
            load_json_schema(Path("/nonexistent/schema.json"))
