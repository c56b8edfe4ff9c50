from abc import ABC, abstractmethod


class BaseBlobStore(ABC):
    """Contract for storing original and processed file bytes."""

    @abstractmethod
    def put(self, data: bytes, key: str) -> str:
        """Store bytes under ``key``.

        Returns:
            Location reference to pass to ``get`` and ``delete``.
        """

    @abstractmethod
    def get(self, location: str) -> bytes:
        """Read bytes back.

        Raises:
            BlobNotFoundError: if nothing is stored at ``location``.
        """

    @abstractmethod
    def delete(self, location: str) -> None:
        """Remove the blob. Deleting a missing blob is not an error."""
