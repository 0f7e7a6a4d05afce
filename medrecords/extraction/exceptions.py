class ExtractionError(Exception):
    """Raised when examination extraction fails."""


class ExtractionValidationError(ExtractionError):
    """Raised when the extracted payload violates the examination schema."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
