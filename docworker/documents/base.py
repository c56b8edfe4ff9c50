from abc import ABC, abstractmethod

from docworker.documents.models import Document


class BaseDocumentStore(ABC):
    """Contract for document metadata persistence."""

    @abstractmethod
    def find_by_id(self, document_id: str) -> Document:
        """Return the stored document.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """

    @abstractmethod
    def save(self, document: Document) -> bool:
        """Insert or update the document by ID.

        A stored document that is already ``completed`` is never overwritten.

        Returns:
            False if the write was refused because the stored record is completed.
        """

    @abstractmethod
    def list_by_owner(self, owner_id: str) -> list[Document]:
        """Return the owner's documents, newest first."""

    @abstractmethod
    def search(self, owner_id: str, keyword: str) -> list[Document]:
        """Case-insensitive match on original name or summary, newest first."""
