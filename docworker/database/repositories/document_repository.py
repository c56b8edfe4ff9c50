from typing import Any

from psycopg.rows import dict_row

from docworker.database.connection import get_connection
from docworker.documents.base import BaseDocumentStore
from docworker.documents.exceptions import DocumentNotFoundError
from docworker.documents.models import Document, DocumentStatus

_COLUMNS = """
    id, owner_id, original_name, mime_type, size_bytes, status,
    original_location, processed_location, extracted_text, summary,
    error_message, created_at, updated_at
"""


class DocumentRepository(BaseDocumentStore):
    """Database operations for the documents table."""

    def find_by_id(self, document_id: str) -> Document:
        """Find a document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM documents WHERE id = %s",
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return self._to_document(row)

    def save(self, document: Document) -> bool:
        """Upsert by ID. The WHERE clause keeps completed rows untouched."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO documents (
                        id, owner_id, original_name, mime_type, size_bytes, status,
                        original_location, processed_location, extracted_text,
                        summary, error_message, created_at, updated_at
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s,
                            COALESCE(%s, NOW()), NOW())
                    ON CONFLICT (id) DO UPDATE
                    SET owner_id = EXCLUDED.owner_id,
                        original_name = EXCLUDED.original_name,
                        mime_type = EXCLUDED.mime_type,
                        size_bytes = EXCLUDED.size_bytes,
                        status = EXCLUDED.status,
                        original_location = EXCLUDED.original_location,
                        processed_location = EXCLUDED.processed_location,
                        extracted_text = EXCLUDED.extracted_text,
                        summary = EXCLUDED.summary,
                        error_message = EXCLUDED.error_message,
                        updated_at = NOW()
                    WHERE documents.status <> 'completed'
                    """,
                    (
                        document.id,
                        document.owner_id,
                        document.original_name,
                        document.mime_type,
                        document.size_bytes,
                        document.status.value,
                        document.original_location,
                        document.processed_location,
                        document.extracted_text,
                        document.summary,
                        document.error_message,
                        document.created_at,
                    ),
                )
                written = cur.rowcount > 0
            conn.commit()
        return written

    def list_by_owner(self, owner_id: str) -> list[Document]:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS} FROM documents
                    WHERE owner_id = %s
                    ORDER BY created_at DESC
                    """,
                    (owner_id,),
                )
                rows = cur.fetchall()
        return [self._to_document(row) for row in rows]

    def search(self, owner_id: str, keyword: str) -> list[Document]:
        pattern = f"%{self._escape_like(keyword)}%"
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS} FROM documents
                    WHERE owner_id = %s
                      AND (original_name ILIKE %s OR summary ILIKE %s)
                    ORDER BY created_at DESC
                    """,
                    (owner_id, pattern, pattern),
                )
                rows = cur.fetchall()
        return [self._to_document(row) for row in rows]

    @staticmethod
    def _escape_like(keyword: str) -> str:
        return keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")

    @staticmethod
    def _to_document(row: dict[str, Any]) -> Document:
        return Document(
            id=row["id"],
            owner_id=row["owner_id"],
            original_name=row["original_name"],
            mime_type=row["mime_type"],
            size_bytes=row["size_bytes"],
            status=DocumentStatus(row["status"]),
            original_location=row["original_location"],
            processed_location=row["processed_location"],
            extracted_text=row["extracted_text"],
            summary=row["summary"],
            error_message=row["error_message"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
