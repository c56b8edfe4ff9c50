class DocumentError(Exception):
    """Base exception for document store and lifecycle errors."""


class DocumentNotFoundError(DocumentError):
    """Raised when a document cannot be found in the document store."""


class InvalidTransitionError(DocumentError):
    """Raised when a status change is not allowed by the document lifecycle."""
