from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class DocumentStatus(str, Enum):
    """Lifecycle states of an uploaded document."""

    PENDING = "pending"
    UPLOADED = "uploaded"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (DocumentStatus.COMPLETED, DocumentStatus.FAILED)


@dataclass(frozen=True)
class Document:
    """One uploaded file, from ingestion to its processed result."""

    id: str
    owner_id: str
    original_name: str
    mime_type: str
    size_bytes: int
    status: DocumentStatus = DocumentStatus.PENDING
    original_location: str | None = None
    processed_location: str | None = None
    extracted_text: str | None = None
    summary: str | None = None
    error_message: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
