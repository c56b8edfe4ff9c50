from abc import ABC, abstractmethod


class BaseExtractor(ABC):
    """Contract for all format-specific text extraction adapters."""

    @abstractmethod
    def extract(self, data: bytes) -> str:
        """Extract plain text from raw file bytes.

        Args:
            data: Raw file content.

        Returns:
            Extracted text as a single string.

        Raises:
            ExtractionError: if the content cannot be decoded.
        """
