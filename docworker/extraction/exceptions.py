class ExtractionError(Exception):
    """Raised when a file cannot be decoded into text."""


class UnsupportedFormatError(ExtractionError):
    """Raised for a mime type outside the supported set."""
