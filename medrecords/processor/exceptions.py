class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class ValidationError(ProcessorError):
    """Raised when submitted input is rejected before admission."""


class UnsupportedMediaTypeError(ValidationError):
    """Raised when none of the submitted files has a supported media type."""

    def __init__(self, rejected_names: list[str]) -> None:
        self.rejected_names = rejected_names
        super().__init__(
            "No supported files submitted (PDF or image expected): "
            + ", ".join(rejected_names)
        )


class FileReadError(ProcessorError):
    """Raised when a file cannot be read from disk."""


class DuplicateResultError(ProcessorError):
    """Raised when a result id is inserted into the collection twice."""


class StatusTransitionError(ProcessorError):
    """Raised on a backwards or out-of-terminal status change."""
