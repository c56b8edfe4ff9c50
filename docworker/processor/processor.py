import time
from pathlib import Path

from docworker.config.settings import Settings
from docworker.documents.models import Document
from docworker.extraction.extractor import Extractor
from docworker.extraction.factory import ExtractorFactory
from docworker.logging.logger import Log
from docworker.processor.exceptions import MissingOriginalError
from docworker.processor.models import ProcessorResult
from docworker.storage.base import BaseBlobStore
from docworker.storage.keys import processed_blob_key
from docworker.storage.local_store import LocalBlobStore
from docworker.summarization.base import BaseSummarizer
from docworker.summarization.factory import SummarizerFactory


class Processor:
    """Runs the processing stages for one document.

    Pipeline: load original -> extract -> summarize -> store processed text.
    The document record itself is not touched here.
    """

    def __init__(
        self,
        blob_store: BaseBlobStore,
        extractor: Extractor,
        summarizer: BaseSummarizer,
    ) -> None:
        self._blob_store = blob_store
        self._extractor = extractor
        self._summarizer = summarizer

    def process(self, document: Document) -> ProcessorResult:
        Log.info(f"Processing document {document.id} ({document.mime_type})")

        # Step 1: Load original bytes
        if not document.original_location:
            raise MissingOriginalError(f"Document {document.id} has no stored original")
        raw_bytes = self._blob_store.get(document.original_location)
        Log.info(f"Loaded {len(raw_bytes)} bytes for document {document.id}")

        # Step 2: Extract text
        started = time.monotonic()
        extracted_text = self._extractor.extract(raw_bytes, document.mime_type)
        Log.info(
            f"Extracted {len(extracted_text)} chars from document {document.id} "
            f"in {time.monotonic() - started:.2f}s"
        )

        # Step 3: Summarize
        started = time.monotonic()
        summary = self._summarizer.summarize(extracted_text)
        Log.info(
            f"Summarized document {document.id} to {len(summary)} chars "
            f"in {time.monotonic() - started:.2f}s"
        )

        # Step 4: Store processed text
        processed_location = self._blob_store.put(
            extracted_text.encode("utf-8"),
            processed_blob_key(document.owner_id, document.id),
        )

        return ProcessorResult(
            document_id=document.id,
            extracted_text=extracted_text,
            summary=summary,
            processed_location=processed_location,
        )


def build_blob_store(settings: Settings, blob_root: Path | None = None) -> BaseBlobStore:
    return LocalBlobStore(root=blob_root if blob_root is not None else Path(settings.blob_root))


def build_processor(
    settings: Settings,
    blob_store: BaseBlobStore | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    return Processor(
        blob_store=blob_store if blob_store is not None else build_blob_store(settings),
        extractor=ExtractorFactory.create(settings),
        summarizer=SummarizerFactory.create(settings),
    )
