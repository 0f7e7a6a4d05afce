class PdfRenderError(Exception):
    """Raised when a PDF cannot be rendered to page images."""
