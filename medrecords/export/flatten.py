from collections.abc import Sequence
from dataclasses import asdict, dataclass

from medrecords.extraction.models import Diagnosis, Examination
from medrecords.processor.models import FileResult, FileStatus

_NO_DIAGNOSIS = Diagnosis(diagnosis_name="")


@dataclass(frozen=True)
class FlatRow:
    """One exported row: examination fields plus a single diagnosis.

    Attribute names are the export column headers.
    """

    DosyaAdi: str
    Yas: str
    MuayeneSaati: str
    UzmanlikServis: str
    Sikayet: str
    TaniSira: str
    TaniKonu: str
    TaniTuru: str
    TaniAdi: str

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


COLUMNS: tuple[str, ...] = tuple(FlatRow.__dataclass_fields__)


def flatten(snapshot: Sequence[FileResult]) -> list[FlatRow]:
    """Project successful results into rows.

    One row per diagnosis; an examination without diagnoses still yields one
    row with empty diagnosis columns. Non-successful results yield nothing.
    """
    rows: list[FlatRow] = []
    for result in snapshot:
        if result.status != FileStatus.SUCCESS:
            continue
        for exam in result.examinations:
            for diagnosis in exam.diagnoses or [_NO_DIAGNOSIS]:
                rows.append(_row(result.file_name, exam, diagnosis))
    return rows


def _row(file_name: str, exam: Examination, diagnosis: Diagnosis) -> FlatRow:
    return FlatRow(
        DosyaAdi=file_name,
        Yas=exam.age,
        MuayeneSaati=exam.exam_time,
        UzmanlikServis=exam.specialty_or_service,
        Sikayet=exam.complaint,
        TaniSira=diagnosis.sequence_no,
        TaniKonu=diagnosis.topic,
        TaniTuru=diagnosis.diagnosis_type,
        TaniAdi=diagnosis.diagnosis_name,
    )
