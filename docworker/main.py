import argparse
import json
import mimetypes
from dataclasses import dataclass
from pathlib import Path

from docworker.config.settings import Settings
from docworker.database.connection import close_pool, init_pool, init_schema, reset_pool
from docworker.database.repositories.document_repository import DocumentRepository
from docworker.documents.base import BaseDocumentStore
from docworker.documents.exceptions import DocumentError
from docworker.extraction.exceptions import UnsupportedFormatError
from docworker.ingestion.uploader import DocumentUploader
from docworker.logging.logger import Log
from docworker.processor.processor import build_blob_store, build_processor
from docworker.queue.base import BaseQueueStore
from docworker.queue.factory import QueueStoreFactory
from docworker.storage.base import BaseBlobStore
from docworker.worker.job_runner import JobRunner
from docworker.worker.worker import Worker


@dataclass
class AppContext:
    settings: Settings
    queue_store: BaseQueueStore
    doc_store: BaseDocumentStore
    blob_store: BaseBlobStore

    def uploader(self) -> DocumentUploader:
        return DocumentUploader(self.doc_store, self.blob_store, self.queue_store)


def run_worker(args: argparse.Namespace, ctx: AppContext) -> int:
    if ctx.settings.reset_queue_on_startup:
        Log.warning("RESET_QUEUE_ON_STARTUP is set, dropping all queued jobs")
        ctx.queue_store.reset()

    def reconnect() -> None:
        reset_pool(ctx.settings)
        ctx.queue_store.ping()

    processor = build_processor(ctx.settings, blob_store=ctx.blob_store)
    job_runner = JobRunner(
        processor,
        ctx.queue_store,
        ctx.doc_store,
        lease_timeout_seconds=ctx.settings.job_lease_timeout_seconds,
    )
    worker = Worker(ctx.queue_store, job_runner, ctx.settings, reconnect=reconnect)
    worker.run(max_jobs=getattr(args, "max_jobs", None))
    return 0


def upload_file(args: argparse.Namespace, ctx: AppContext) -> int:
    path = Path(args.path)
    mime_type = args.mime_type or mimetypes.guess_type(path.name)[0] or ""
    try:
        document = ctx.uploader().upload(
            owner_id=args.owner,
            original_name=path.name,
            mime_type=mime_type,
            data=path.read_bytes(),
        )
    except UnsupportedFormatError as exc:
        Log.error(str(exc))
        return 1
    _print_json({"id": document.id, "status": document.status.value})
    return 0


def enqueue_document(args: argparse.Namespace, ctx: AppContext) -> int:
    job = ctx.queue_store.enqueue(args.document_id, args.owner_id)
    _print_json(job.to_payload())
    return 0


def requeue_document(args: argparse.Namespace, ctx: AppContext) -> int:
    try:
        document = ctx.uploader().requeue(args.document_id)
    except DocumentError as exc:
        Log.error(str(exc))
        return 1
    _print_json({"id": document.id, "status": document.status.value})
    return 0


def show_status(args: argparse.Namespace, ctx: AppContext) -> int:
    payload: dict[str, object] = dict(ctx.queue_store.status().to_dict())
    if args.history:
        payload["recentCompleted"] = [
            j.to_payload() for j in ctx.queue_store.history("completed", args.history)
        ]
        payload["recentFailed"] = [
            j.to_payload() for j in ctx.queue_store.history("failed", args.history)
        ]
    _print_json(payload)
    return 0


def search_documents(args: argparse.Namespace, ctx: AppContext) -> int:
    documents = ctx.doc_store.search(args.owner_id, args.keyword)
    _print_json(
        [
            {
                "id": d.id,
                "originalName": d.original_name,
                "status": d.status.value,
                "summary": d.summary,
            }
            for d in documents
        ]
    )
    return 0


def reset_queue(_args: argparse.Namespace, ctx: AppContext) -> int:
    ctx.queue_store.reset()
    Log.info("Queue lists and counters reset")
    return 0


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docworker",
        description="Document processing worker and queue tools",
    )
    parser.set_defaults(handler=run_worker)
    subparsers = parser.add_subparsers(dest="command")

    worker = subparsers.add_parser("worker", help="Run the processing loop (default)")
    worker.add_argument("--max-jobs", type=int, default=None)
    worker.set_defaults(handler=run_worker)

    upload = subparsers.add_parser("upload", help="Store a local file and queue it")
    upload.add_argument("path")
    upload.add_argument("--owner", required=True)
    upload.add_argument("--mime-type", default=None)
    upload.set_defaults(handler=upload_file)

    enqueue = subparsers.add_parser("enqueue", help="Queue an existing document")
    enqueue.add_argument("document_id")
    enqueue.add_argument("owner_id")
    enqueue.set_defaults(handler=enqueue_document)

    requeue = subparsers.add_parser("requeue", help="Reprocess a failed document")
    requeue.add_argument("document_id")
    requeue.set_defaults(handler=requeue_document)

    status = subparsers.add_parser("status", help="Print queue counters as JSON")
    status.add_argument("--history", type=int, default=0, metavar="N")
    status.set_defaults(handler=show_status)

    search = subparsers.add_parser("search", help="Search an owner's documents")
    search.add_argument("owner_id")
    search.add_argument("keyword")
    search.set_defaults(handler=search_documents)

    reset = subparsers.add_parser("reset", help="Clear all queue lists and counters")
    reset.set_defaults(handler=reset_queue)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point: initialize pool -> open queue -> dispatch command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        init_pool(settings)
    except Exception as exc:
        Log.error(f"Cannot reach the document database: {exc}")
        return 1

    queue_store: BaseQueueStore | None = None
    try:
        if settings.db_auto_migrate:
            init_schema()
        queue_store = QueueStoreFactory.create(settings)
        try:
            queue_store.ping()
        except Exception as exc:
            Log.error(f"Cannot reach the queue store: {exc}")
            return 1
        ctx = AppContext(
            settings=settings,
            queue_store=queue_store,
            doc_store=DocumentRepository(),
            blob_store=build_blob_store(settings),
        )
        return int(args.handler(args, ctx))
    finally:
        if queue_store is not None:
            queue_store.close()
        close_pool()


if __name__ == "__main__":
    raise SystemExit(main())
