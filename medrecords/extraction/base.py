from abc import ABC, abstractmethod

from medrecords.extraction.models import Examination


class BaseExtractor(ABC):
    """Contract for the document-understanding service."""

    @abstractmethod
    async def extract(self, payload: str, media_type: str) -> list[Examination]:
        """Extract every examination record found in a document.

        Args:
            payload: Base64-encoded document bytes.
            media_type: MIME type of the document, e.g. "application/pdf".

        Returns:
            Examinations in document order (possibly empty).

        Raises:
            ExtractionError: on any failure, including malformed responses.
        """
