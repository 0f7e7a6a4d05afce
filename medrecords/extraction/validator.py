"""Validates the provider's parsed JSON and builds domain examinations."""

from typing import Any

from medrecords.extraction.exceptions import ExtractionValidationError
from medrecords.extraction.models import Diagnosis, Examination

_MAX_EXAMINATIONS = 200

# wire name -> Examination attribute
_EXAMINATION_FIELDS = {
    "yas": "age",
    "muayeneSaati": "exam_time",
    "uzmanlikServis": "specialty_or_service",
    "sikayet": "complaint",
}

_DIAGNOSIS_FIELDS = {
    "sira": "sequence_no",
    "konu": "topic",
    "taniTuru": "diagnosis_type",
}


def validate_and_build(data: Any) -> list[Examination]:
    """Validate a parsed response and build the examination list.

    Accepts either a bare JSON array of examinations or an object wrapping it
    under "examinations". Missing or null scalar fields become "".

    Raises:
        ExtractionValidationError: on any structural violation.
    """
    raw_examinations = _unwrap(data)
    if len(raw_examinations) > _MAX_EXAMINATIONS:
        raise ExtractionValidationError(
            f"Too many examinations: {len(raw_examinations)} (max {_MAX_EXAMINATIONS})"
        )
    return [_build_examination(item, i) for i, item in enumerate(raw_examinations)]


def _unwrap(data: Any) -> list[Any]:
    if isinstance(data, dict):
        if "examinations" not in data:
            raise ExtractionValidationError("Missing required top-level field: examinations")
        data = data["examinations"]
    if not isinstance(data, list):
        raise ExtractionValidationError("'examinations' must be a list")
    return data


def _build_examination(raw: Any, index: int) -> Examination:
    if not isinstance(raw, dict):
        raise ExtractionValidationError(f"Examination at index {index} must be an object")
    scalars = {
        attr: _optional_string(raw.get(wire), f"Examination at index {index}: '{wire}'")
        for wire, attr in _EXAMINATION_FIELDS.items()
    }
    raw_diagnoses = raw.get("tanilar")
    if not isinstance(raw_diagnoses, list):
        raise ExtractionValidationError(
            f"Examination at index {index}: 'tanilar' must be a list"
        )
    diagnoses = [
        _build_diagnosis(item, index, j) for j, item in enumerate(raw_diagnoses)
    ]
    return Examination(diagnoses=diagnoses, **scalars)


def _build_diagnosis(raw: Any, exam_index: int, index: int) -> Diagnosis:
    where = f"Diagnosis {index} of examination {exam_index}"
    if not isinstance(raw, dict):
        raise ExtractionValidationError(f"{where} must be an object")
    name = raw.get("taniAdi")
    if not name or not isinstance(name, str):
        raise ExtractionValidationError(f"{where}: 'taniAdi' must be a non-empty string")
    fields = {
        attr: _optional_string(raw.get(wire), f"{where}: '{wire}'")
        for wire, attr in _DIAGNOSIS_FIELDS.items()
    }
    return Diagnosis(diagnosis_name=name, **fields)


def _optional_string(value: Any, where: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ExtractionValidationError(f"{where} must be a string")
    # models occasionally emit ages and sequence numbers as bare numbers
    return value if isinstance(value, str) else str(value)
