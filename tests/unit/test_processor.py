from unittest.mock import MagicMock

import pytest

from docworker.documents.models import Document, DocumentStatus
from docworker.extraction.exceptions import ExtractionError
from docworker.processor.exceptions import MissingOriginalError
from docworker.processor.processor import Processor
from docworker.storage.exceptions import BlobNotFoundError
from docworker.storage.local_store import LocalBlobStore


def _make_document(original_location: str | None = "owner-1/1-abc.txt") -> Document:
    return Document(
        id="doc-1",
        owner_id="owner-1",
        original_name="notes.txt",
        mime_type="text/plain",
        size_bytes=11,
        status=DocumentStatus.PROCESSING,
        original_location=original_location,
    )


def _make_processor(blob_store: LocalBlobStore) -> tuple[Processor, MagicMock, MagicMock]:
    extractor = MagicMock()
    summarizer = MagicMock()
    extractor.extract.return_value = "Extracted body."
    summarizer.summarize.return_value = "Summary."
    return Processor(blob_store, extractor, summarizer), extractor, summarizer


class TestProcessor:
    def test_runs_stages_in_order(self, blob_store: LocalBlobStore) -> None:
        blob_store.put(b"raw content", "owner-1/1-abc.txt")
        processor, extractor, summarizer = _make_processor(blob_store)

        result = processor.process(_make_document())

        extractor.extract.assert_called_once_with(b"raw content", "text/plain")
        summarizer.summarize.assert_called_once_with("Extracted body.")
        assert result.document_id == "doc-1"
        assert result.extracted_text == "Extracted body."
        assert result.summary == "Summary."

    def test_stores_extracted_text_artifact(self, blob_store: LocalBlobStore) -> None:
        blob_store.put(b"raw content", "owner-1/1-abc.txt")
        processor, _extractor, _summarizer = _make_processor(blob_store)

        result = processor.process(_make_document())

        assert result.processed_location == "owner-1/processed/doc-1.txt"
        assert blob_store.get(result.processed_location) == b"Extracted body."

    def test_missing_original_location_raises(self, blob_store: LocalBlobStore) -> None:
        processor, extractor, _summarizer = _make_processor(blob_store)

        with pytest.raises(MissingOriginalError, match="no stored original"):
            processor.process(_make_document(original_location=None))

        extractor.extract.assert_not_called()

    def test_missing_blob_propagates(self, blob_store: LocalBlobStore) -> None:
        processor, _extractor, _summarizer = _make_processor(blob_store)

        with pytest.raises(BlobNotFoundError):
            processor.process(_make_document())

    def test_extraction_error_skips_summary_and_artifact(
        self, blob_store: LocalBlobStore
    ) -> None:
        blob_store.put(b"raw content", "owner-1/1-abc.txt")
        processor, extractor, summarizer = _make_processor(blob_store)
        extractor.extract.side_effect = ExtractionError("docx extraction failed: bad zip")

        with pytest.raises(ExtractionError):
            processor.process(_make_document())

        summarizer.summarize.assert_not_called()
        with pytest.raises(BlobNotFoundError):
            blob_store.get("owner-1/processed/doc-1.txt")
