import uuid
from datetime import UTC, datetime

from docworker.documents import state_machine
from docworker.documents.base import BaseDocumentStore
from docworker.documents.models import Document
from docworker.extraction.exceptions import UnsupportedFormatError
from docworker.extraction.mime_types import is_supported, normalize_mime_type
from docworker.logging.logger import Log
from docworker.queue.base import BaseQueueStore
from docworker.storage.base import BaseBlobStore
from docworker.storage.keys import build_blob_key


class DocumentUploader:
    """Accepts new files and operator requeues, and feeds the processing queue."""

    def __init__(
        self,
        doc_store: BaseDocumentStore,
        blob_store: BaseBlobStore,
        queue_store: BaseQueueStore,
    ) -> None:
        self._doc_store = doc_store
        self._blob_store = blob_store
        self._queue = queue_store

    def upload(
        self,
        *,
        owner_id: str,
        original_name: str,
        mime_type: str,
        data: bytes,
    ) -> Document:
        """Record, store and enqueue one file.

        Raises:
            UnsupportedFormatError: before anything is stored, for unsupported types.
            BlobStoreError: if the bytes cannot be stored (the record is marked failed).
        """
        if not is_supported(mime_type):
            raise UnsupportedFormatError(f"File type '{mime_type}' is not supported")

        document = Document(
            id=uuid.uuid4().hex,
            owner_id=owner_id,
            original_name=original_name,
            mime_type=normalize_mime_type(mime_type),
            size_bytes=len(data),
            created_at=datetime.now(UTC),
        )
        self._doc_store.save(document)

        try:
            location = self._blob_store.put(data, build_blob_key(owner_id, original_name))
        except Exception as exc:
            Log.error(f"Storing {original_name} for document {document.id} failed: {exc}")
            self._doc_store.save(state_machine.fail(document, str(exc)))
            raise

        document = state_machine.mark_uploaded(document, location)
        self._doc_store.save(document)
        self._queue.enqueue(document.id, owner_id)
        Log.info(f"Document {document.id} ({original_name}) uploaded and queued")
        return document

    def requeue(self, document_id: str) -> Document:
        """Operator action: send a failed document through the pipeline again.

        Raises:
            DocumentNotFoundError: if the document does not exist.
            InvalidTransitionError: if the document is not failed.
        """
        document = state_machine.requeue(self._doc_store.find_by_id(document_id))
        self._doc_store.save(document)
        self._queue.enqueue(document.id, document.owner_id)
        Log.info(f"Document {document.id} re-enqueued by operator")
        return document
