class BlobStoreError(Exception):
    """Base exception for blob store failures."""


class BlobNotFoundError(BlobStoreError):
    """Raised when no blob exists at the given location."""
