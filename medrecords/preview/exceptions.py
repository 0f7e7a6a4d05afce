class HandleReleasedError(Exception):
    """Raised when a preview handle is used or released after release."""
