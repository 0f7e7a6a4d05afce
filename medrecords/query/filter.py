from collections.abc import Sequence

from medrecords.extraction.models import Diagnosis, Examination
from medrecords.processor.models import FileResult


def filter_results(snapshot: Sequence[FileResult], query: str) -> list[FileResult]:
    """Return the results matching a free-text query, in snapshot order.

    A blank query matches everything. Otherwise the query is matched
    case-insensitively as a substring of the file name or of any examination
    or diagnosis field.
    """
    if not query.strip():
        return list(snapshot)
    needle = query.casefold()
    return [result for result in snapshot if _matches(result, needle)]


def _matches(result: FileResult, needle: str) -> bool:
    if needle in result.file_name.casefold():
        return True
    return any(_examination_matches(exam, needle) for exam in result.examinations)


def _examination_matches(exam: Examination, needle: str) -> bool:
    fields = (exam.age, exam.exam_time, exam.specialty_or_service, exam.complaint)
    if any(needle in value.casefold() for value in fields if value):
        return True
    return any(_diagnosis_matches(diagnosis, needle) for diagnosis in exam.diagnoses)


def _diagnosis_matches(diagnosis: Diagnosis, needle: str) -> bool:
    fields = (
        diagnosis.topic,
        diagnosis.diagnosis_type,
        diagnosis.diagnosis_name,
        diagnosis.sequence_no,
    )
    return any(needle in value.casefold() for value in fields if value)
