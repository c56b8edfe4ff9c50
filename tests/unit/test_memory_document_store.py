from datetime import UTC, datetime

import pytest

from docworker.documents.exceptions import DocumentNotFoundError
from docworker.documents.memory_store import InMemoryDocumentStore
from docworker.documents.models import Document, DocumentStatus


def _make_document(
    doc_id: str = "doc-1",
    owner_id: str = "owner-1",
    status: DocumentStatus = DocumentStatus.PENDING,
    **fields: object,
) -> Document:
    values: dict[str, object] = {
        "id": doc_id,
        "owner_id": owner_id,
        "original_name": f"{doc_id}.txt",
        "mime_type": "text/plain",
        "size_bytes": 10,
        "status": status,
    }
    values.update(fields)
    return Document(**values)  # type: ignore[arg-type]


class TestFindAndSave:
    def test_find_missing_raises(self, doc_store: InMemoryDocumentStore) -> None:
        with pytest.raises(DocumentNotFoundError, match="Document nope not found"):
            doc_store.find_by_id("nope")

    def test_save_then_find(self, doc_store: InMemoryDocumentStore) -> None:
        assert doc_store.save(_make_document()) is True

        found = doc_store.find_by_id("doc-1")

        assert found.original_name == "doc-1.txt"
        assert found.created_at is not None
        assert found.updated_at is not None

    def test_save_keeps_original_created_at(self, doc_store: InMemoryDocumentStore) -> None:
        created = datetime(2024, 1, 1, tzinfo=UTC)
        doc_store.save(_make_document(created_at=created))

        doc_store.save(_make_document(status=DocumentStatus.UPLOADED, created_at=None))

        found = doc_store.find_by_id("doc-1")
        assert found.created_at == created
        assert found.status is DocumentStatus.UPLOADED

    def test_completed_document_is_not_overwritten(
        self, doc_store: InMemoryDocumentStore
    ) -> None:
        doc_store.save(_make_document(status=DocumentStatus.COMPLETED, summary="done"))

        written = doc_store.save(
            _make_document(status=DocumentStatus.FAILED, error_message="late failure")
        )

        found = doc_store.find_by_id("doc-1")
        assert written is False
        assert found.status is DocumentStatus.COMPLETED
        assert found.summary == "done"
        assert found.error_message is None


class TestListAndSearch:
    def test_list_by_owner_newest_first(self, doc_store: InMemoryDocumentStore) -> None:
        doc_store.save(_make_document("old", created_at=datetime(2024, 1, 1, tzinfo=UTC)))
        doc_store.save(_make_document("new", created_at=datetime(2024, 6, 1, tzinfo=UTC)))
        doc_store.save(_make_document("other", owner_id="owner-2"))

        assert [d.id for d in doc_store.list_by_owner("owner-1")] == ["new", "old"]

    def test_search_matches_name_and_summary(self, doc_store: InMemoryDocumentStore) -> None:
        doc_store.save(_make_document("invoice", original_name="Invoice-March.pdf"))
        doc_store.save(_make_document("notes", summary="Contains the INVOICE totals"))
        doc_store.save(_make_document("misc", summary="nothing relevant"))

        found = {d.id for d in doc_store.search("owner-1", "invoice")}

        assert found == {"invoice", "notes"}

    def test_search_is_scoped_to_owner(self, doc_store: InMemoryDocumentStore) -> None:
        doc_store.save(_make_document("theirs", owner_id="owner-2", summary="invoice"))

        assert doc_store.search("owner-1", "invoice") == []
