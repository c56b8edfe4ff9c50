class ProcessorError(Exception):
    """Base exception for processor-related errors."""


class MissingOriginalError(ProcessorError):
    """Raised when a document has no stored original to process."""
