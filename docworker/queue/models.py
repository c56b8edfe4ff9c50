import hashlib
import json
import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Any

from docworker.queue.exceptions import MalformedJobError


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Job:
    """A unit of work referencing one document.

    On the wire: {"jobId", "documentId", "ownerId", "timestamp", "errorMessage"?}.
    """

    document_id: str
    owner_id: str
    enqueued_at: int = field(default_factory=now_ms)
    job_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    error_message: str | None = None
    # Exact serialized form the item was read from, when it came off a queue.
    raw: str | None = field(default=None, compare=False, repr=False)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "jobId": self.job_id,
            "documentId": self.document_id,
            "ownerId": self.owner_id,
            "timestamp": self.enqueued_at,
        }
        if self.error_message is not None:
            payload["errorMessage"] = self.error_message
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), separators=(",", ":"))

    @classmethod
    def from_payload(cls, payload: Any) -> "Job":
        if not isinstance(payload, dict):
            raise MalformedJobError("Job payload must be an object")
        try:
            document_id = str(payload["documentId"])
            owner_id = str(payload["ownerId"])
            enqueued_at = int(payload["timestamp"])
        except (KeyError, TypeError, ValueError) as exc:
            raise MalformedJobError(f"Invalid job payload: {exc}") from exc
        error_message = payload.get("errorMessage")
        return cls(
            document_id=document_id,
            owner_id=owner_id,
            enqueued_at=enqueued_at,
            job_id=str(payload.get("jobId") or _derived_job_id(document_id, owner_id, enqueued_at)),
            error_message=str(error_message) if error_message is not None else None,
        )

    @classmethod
    def from_json(cls, raw: str | bytes) -> "Job":
        """Parse a queue item and keep the exact string it was read from."""
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MalformedJobError(f"Job payload is not valid JSON: {exc}") from exc
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        return replace(cls.from_payload(payload), raw=text)


def _derived_job_id(document_id: str, owner_id: str, enqueued_at: int) -> str:
    """Stable id for items written without a jobId, so every read of one item agrees."""
    seed = f"{document_id}\x00{owner_id}\x00{enqueued_at}"
    return hashlib.sha256(seed.encode("utf-8")).hexdigest()[:32]


@dataclass(frozen=True)
class QueueStatus:
    """Snapshot of the queue counters."""

    waiting: int
    active: int
    completed: int
    failed: int
    timestamp: int = field(default_factory=now_ms)

    @classmethod
    def from_counters(cls, counters: dict[str, int]) -> "QueueStatus":
        """Build a snapshot, clamping drifted counters at zero."""
        return cls(
            waiting=max(0, int(counters.get("waiting", 0))),
            active=max(0, int(counters.get("active", 0))),
            completed=max(0, int(counters.get("completed", 0))),
            failed=max(0, int(counters.get("failed", 0))),
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "waiting": self.waiting,
            "active": self.active,
            "completed": self.completed,
            "failed": self.failed,
            "timestamp": self.timestamp,
        }
