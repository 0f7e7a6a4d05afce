from abc import ABC, abstractmethod


class BasePdfRasterizer(ABC):
    """Contract for turning PDF pages into images for image-only providers."""

    @abstractmethod
    def render_pages(self, pdf_bytes: bytes) -> list[bytes]:
        """Render every page of a PDF.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            One PNG image per page, in page order.

        Raises:
            PdfRenderError: if the document cannot be rendered.
        """
