"""Document lifecycle: pending -> uploaded -> processing -> completed | failed.

Every helper returns a new Document; the input is never modified. Completed
and failed are terminal for the pipeline. The single way out of ``failed`` is
the operator action ``requeue``, which puts the document back to ``uploaded``
so a fresh job can pick it up.
"""

from dataclasses import replace
from datetime import UTC, datetime

from docworker.documents.exceptions import InvalidTransitionError
from docworker.documents.models import Document, DocumentStatus

ALLOWED_TRANSITIONS: dict[DocumentStatus, frozenset[DocumentStatus]] = {
    DocumentStatus.PENDING: frozenset({DocumentStatus.UPLOADED, DocumentStatus.FAILED}),
    DocumentStatus.UPLOADED: frozenset({DocumentStatus.PROCESSING, DocumentStatus.FAILED}),
    # processing -> processing re-leases a document whose worker died mid-job
    DocumentStatus.PROCESSING: frozenset(
        {DocumentStatus.PROCESSING, DocumentStatus.COMPLETED, DocumentStatus.FAILED}
    ),
    DocumentStatus.COMPLETED: frozenset(),
    DocumentStatus.FAILED: frozenset(),
}


def can_transition(current: DocumentStatus, target: DocumentStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def _transition(document: Document, target: DocumentStatus, **changes: object) -> Document:
    if not can_transition(document.status, target):
        raise InvalidTransitionError(
            f"Document {document.id}: cannot move from "
            f"'{document.status.value}' to '{target.value}'"
        )
    return replace(
        document,
        status=target,
        updated_at=datetime.now(UTC),
        **changes,  # type: ignore[arg-type]
    )


def mark_uploaded(document: Document, original_location: str) -> Document:
    """Bytes are durably stored; the document may now be enqueued."""
    return _transition(
        document,
        DocumentStatus.UPLOADED,
        original_location=original_location,
    )


def start_processing(document: Document) -> Document:
    """A worker holds the job for this document."""
    return _transition(document, DocumentStatus.PROCESSING, error_message=None)


def complete(
    document: Document,
    *,
    extracted_text: str,
    summary: str,
    processed_location: str,
) -> Document:
    return _transition(
        document,
        DocumentStatus.COMPLETED,
        extracted_text=extracted_text,
        summary=summary,
        processed_location=processed_location,
        error_message=None,
    )


def fail(document: Document, error_message: str) -> Document:
    """Record a failure; results of any earlier attempt are cleared."""
    return _transition(
        document,
        DocumentStatus.FAILED,
        error_message=error_message or "Unknown error",
        extracted_text=None,
        summary=None,
        processed_location=None,
    )


def requeue(document: Document) -> Document:
    """Explicit operator action: return a failed document to ``uploaded``.

    Raises:
        InvalidTransitionError: if the document is not in ``failed``.
    """
    if document.status is not DocumentStatus.FAILED:
        raise InvalidTransitionError(
            f"Document {document.id}: only failed documents can be re-enqueued "
            f"(status is '{document.status.value}')"
        )
    if not document.original_location:
        raise InvalidTransitionError(
            f"Document {document.id}: no stored bytes to reprocess"
        )
    return replace(
        document,
        status=DocumentStatus.UPLOADED,
        error_message=None,
        updated_at=datetime.now(UTC),
    )
