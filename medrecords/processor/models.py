import mimetypes
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from medrecords.extraction.models import Examination
from medrecords.preview.handles import FileHandle

PDF_MEDIA_TYPE = "application/pdf"


def is_supported_media_type(media_type: str) -> bool:
    """PDF and any image/* type are accepted."""
    media_type = media_type.lower()
    return media_type == PDF_MEDIA_TYPE or media_type.startswith("image/")


@dataclass(frozen=True)
class RawFile:
    """A user-submitted file, not yet admitted."""

    name: str
    media_type: str
    path: Path

    @classmethod
    def from_path(cls, path: Path | str) -> "RawFile":
        path = Path(path)
        media_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            media_type=media_type or "application/octet-stream",
            path=path,
        )


class FileStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


ALLOWED_TRANSITIONS: dict[FileStatus, frozenset[FileStatus]] = {
    FileStatus.PENDING: frozenset({FileStatus.PROCESSING}),
    FileStatus.PROCESSING: frozenset({FileStatus.SUCCESS, FileStatus.ERROR}),
    FileStatus.SUCCESS: frozenset(),
    FileStatus.ERROR: frozenset(),
}


@dataclass(frozen=True)
class ExtractionSucceeded:
    """Pipeline outcome: the document was read and extracted."""

    examinations: list[Examination] = field(default_factory=list)

    @property
    def status(self) -> FileStatus:
        return FileStatus.SUCCESS


@dataclass(frozen=True)
class ExtractionFailed:
    """Pipeline outcome: loading or extraction failed; terminal for the file."""

    error_message: str

    @property
    def status(self) -> FileStatus:
        return FileStatus.ERROR


PipelineOutcome = ExtractionSucceeded | ExtractionFailed


@dataclass(frozen=True)
class FileResult:
    """One admitted file and what was extracted from it."""

    id: str
    file_name: str
    file_handle: FileHandle
    media_type: str
    status: FileStatus = FileStatus.PENDING
    examinations: list[Examination] = field(default_factory=list)
    error_message: str | None = None

    def __post_init__(self) -> None:
        if (self.error_message is not None) != (self.status == FileStatus.ERROR):
            raise ValueError("error_message is set exactly when status is 'error'")
        if self.examinations and self.status != FileStatus.SUCCESS:
            raise ValueError("only successful results carry examinations")
