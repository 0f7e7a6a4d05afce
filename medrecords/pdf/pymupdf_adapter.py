import pymupdf

from medrecords.pdf.base import BasePdfRasterizer
from medrecords.pdf.exceptions import PdfRenderError


class PyMuPdfRasterizer(BasePdfRasterizer):
    """Renders PDF pages to PNG using PyMuPDF."""

    def __init__(self, dpi: int = 150, max_pages: int = 20) -> None:
        self._dpi = dpi
        self._max_pages = max_pages

    def render_pages(self, pdf_bytes: bytes) -> list[bytes]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.page_count > self._max_pages:
                    raise PdfRenderError(
                        f"PDF has {doc.page_count} pages (max {self._max_pages})"
                    )
                return [page.get_pixmap(dpi=self._dpi).tobytes("png") for page in doc]
        except PdfRenderError:
            raise
        except Exception as exc:
            raise PdfRenderError(f"pymupdf rendering failed: {exc}") from exc
