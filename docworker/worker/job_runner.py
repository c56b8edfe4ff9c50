from docworker.documents import state_machine
from docworker.documents.base import BaseDocumentStore
from docworker.documents.exceptions import DocumentNotFoundError
from docworker.documents.models import Document, DocumentStatus
from docworker.logging.logger import Log
from docworker.processor.processor import Processor
from docworker.queue.base import BaseQueueStore
from docworker.queue.models import Job, now_ms

DOCUMENT_NOT_FOUND = "DocumentNotFound"
DOCUMENT_ALREADY_FAILED = "DocumentAlreadyFailed"


class JobRunner:
    """Resolve one leased job: every outcome ends in mark_completed or mark_failed.

    Errors raised by the stages are recorded on the document and the job.
    Errors from the stores while loading the document escape to the Worker,
    which backs off, reconnects and then gives the lease up through release().
    """

    def __init__(
        self,
        processor: Processor,
        queue_store: BaseQueueStore,
        doc_store: BaseDocumentStore,
        lease_timeout_seconds: int | None = None,
    ) -> None:
        self._processor = processor
        self._queue = queue_store
        self._doc_store = doc_store
        self._lease_timeout_ms = (
            lease_timeout_seconds * 1000 if lease_timeout_seconds is not None else None
        )

    def run(self, job: Job) -> None:
        Log.info(f"Running job {job.job_id} for document {job.document_id}")
        try:
            document = self._doc_store.find_by_id(job.document_id)
        except DocumentNotFoundError:
            Log.error(f"Document {job.document_id} not found, failing job {job.job_id}")
            self._queue.mark_failed(job, DOCUMENT_NOT_FOUND)
            return

        if self._is_duplicate(job):
            Log.info(
                f"Job {job.job_id} duplicates an in-flight job for document "
                f"{job.document_id}, skipping"
            )
            self._queue.mark_completed(job)
            return

        if document.status is DocumentStatus.COMPLETED:
            Log.info(f"Document {document.id} already completed, acknowledging job")
            self._queue.mark_completed(job)
            return

        if document.status is DocumentStatus.FAILED:
            Log.warning(
                f"Document {document.id} is failed and was not requeued, "
                f"dropping stale job {job.job_id}"
            )
            self._queue.mark_failed(job, DOCUMENT_ALREADY_FAILED)
            return

        self._process(job, document)

    def _is_duplicate(self, job: Job) -> bool:
        """True when another live job for the same document holds an earlier lease."""
        leases = [
            lease
            for lease in self._queue.active_jobs()
            if lease.document_id == job.document_id
            and (lease.job_id == job.job_id or not self._is_expired(lease))
        ]
        return bool(leases) and leases[0].job_id != job.job_id

    def _is_expired(self, lease: Job) -> bool:
        if self._lease_timeout_ms is None:
            return False
        if now_ms() - lease.enqueued_at <= self._lease_timeout_ms:
            return False
        Log.warning(
            f"Ignoring expired lease {lease.job_id} for document {lease.document_id}"
        )
        return True

    def _process(self, job: Job, document: Document) -> None:
        try:
            processing = state_machine.start_processing(document)
            if not self._doc_store.save(processing):
                Log.info(f"Document {document.id} was completed concurrently")
                self._queue.mark_completed(job)
                return

            result = self._processor.process(processing)

            completed = state_machine.complete(
                processing,
                extracted_text=result.extracted_text,
                summary=result.summary,
                processed_location=result.processed_location,
            )
            if not self._doc_store.save(completed):
                Log.warning(f"Document {document.id} was completed by another job first")
        except Exception as exc:
            self._handle_failure(job, exc)
            return

        self._queue.mark_completed(job)
        Log.info(f"Job {job.job_id} completed, document {document.id} processed")

    def _handle_failure(self, job: Job, exc: Exception) -> None:
        message = str(exc) or type(exc).__name__
        Log.error(f"Job {job.job_id} failed: {message}")
        try:
            current = self._doc_store.find_by_id(job.document_id)
        except DocumentNotFoundError:
            self._queue.mark_failed(job, message)
            return

        if current.status is DocumentStatus.COMPLETED:
            Log.warning(
                f"Document {current.id} already completed by a concurrent job, "
                f"keeping its result"
            )
            self._queue.mark_completed(job)
            return

        if current.status is not DocumentStatus.FAILED:
            self._doc_store.save(state_machine.fail(current, message))
        self._queue.mark_failed(job, message)

    def release(self, job: Job, message: str) -> None:
        """Give up a lease the Worker could not finish.

        The document is left as it is, so a later enqueue picks it up again.
        A document that completed meanwhile acknowledges the job instead.
        """
        try:
            current = self._doc_store.find_by_id(job.document_id)
        except DocumentNotFoundError:
            self._queue.mark_failed(job, message)
            return

        if current.status is DocumentStatus.COMPLETED:
            self._queue.mark_completed(job)
            return

        Log.warning(f"Releasing job {job.job_id}, document {current.id} awaits a re-enqueue")
        self._queue.mark_failed(job, message)
