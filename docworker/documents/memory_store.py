import threading
from dataclasses import replace
from datetime import UTC, datetime

from docworker.documents.base import BaseDocumentStore
from docworker.documents.exceptions import DocumentNotFoundError
from docworker.documents.models import Document, DocumentStatus


class InMemoryDocumentStore(BaseDocumentStore):
    """Thread-safe document store kept in process memory."""

    def __init__(self) -> None:
        self._documents: dict[str, Document] = {}
        self._lock = threading.Lock()

    def find_by_id(self, document_id: str) -> Document:
        with self._lock:
            document = self._documents.get(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return document

    def save(self, document: Document) -> bool:
        now = datetime.now(UTC)
        with self._lock:
            stored = self._documents.get(document.id)
            if stored is not None and stored.status is DocumentStatus.COMPLETED:
                return False
            created_at = (
                stored.created_at if stored is not None else document.created_at or now
            )
            self._documents[document.id] = replace(
                document,
                created_at=created_at,
                updated_at=now,
            )
        return True

    def list_by_owner(self, owner_id: str) -> list[Document]:
        with self._lock:
            owned = [d for d in self._documents.values() if d.owner_id == owner_id]
        return self._newest_first(owned)

    def search(self, owner_id: str, keyword: str) -> list[Document]:
        needle = keyword.lower()
        matches = [
            d
            for d in self.list_by_owner(owner_id)
            if needle in d.original_name.lower() or needle in (d.summary or "").lower()
        ]
        return matches

    @staticmethod
    def _newest_first(documents: list[Document]) -> list[Document]:
        epoch = datetime.min.replace(tzinfo=UTC)
        return sorted(documents, key=lambda d: d.created_at or epoch, reverse=True)
