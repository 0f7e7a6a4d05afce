from dataclasses import dataclass, field


@dataclass(frozen=True)
class Diagnosis:
    """One diagnosis line within an examination."""

    diagnosis_name: str
    sequence_no: str = ""
    topic: str = ""  # usually an ICD-10 code, e.g. "R51"
    diagnosis_type: str = ""  # e.g. "Ön Tanı", "Kesin Tanı"


@dataclass(frozen=True)
class Examination:
    """One clinical encounter extracted from a document.

    Scalar fields hold "" when the value is not present in the source.
    """

    age: str = ""
    exam_time: str = ""
    specialty_or_service: str = ""
    complaint: str = ""
    diagnoses: list[Diagnosis] = field(default_factory=list)
