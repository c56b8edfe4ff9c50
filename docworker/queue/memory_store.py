import threading
from collections import deque
from dataclasses import replace

from docworker.queue.base import COUNTER_NAMES, BaseQueueStore, Outcome
from docworker.queue.models import Job, QueueStatus


class InMemoryQueueStore(BaseQueueStore):
    """Queue store kept in process memory, guarded by a single lock.

    Implements the same contract as the Postgres and Redis stores; every
    operation is atomic with respect to the others.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: deque[Job] = deque()
        self._active: list[Job] = []
        self._completed: list[Job] = []
        self._failed: list[Job] = []
        self._counters = dict.fromkeys(COUNTER_NAMES, 0)

    def enqueue(self, document_id: str, owner_id: str) -> Job:
        job = Job(document_id=document_id, owner_id=owner_id)
        with self._lock:
            self._pending.append(job)
            self._counters["waiting"] += 1
        return job

    def dequeue(self) -> Job | None:
        with self._lock:
            if not self._pending:
                return None
            job = self._pending.popleft()
            self._active.append(job)
            self._counters["waiting"] -= 1
            self._counters["active"] += 1
        return job

    def active_jobs(self) -> list[Job]:
        with self._lock:
            return list(self._active)

    def mark_completed(self, job: Job) -> None:
        with self._lock:
            self._release(job)
            self._completed.append(job)
            self._counters["active"] -= 1
            self._counters["completed"] += 1

    def mark_failed(self, job: Job, reason: str) -> None:
        with self._lock:
            self._release(job)
            self._failed.append(replace(job, error_message=reason))
            self._counters["active"] -= 1
            self._counters["failed"] += 1

    def status(self) -> QueueStatus:
        with self._lock:
            return QueueStatus.from_counters(self._counters)

    def history(self, outcome: Outcome, limit: int = 50) -> list[Job]:
        with self._lock:
            records = self._completed if outcome == "completed" else self._failed
            return list(records[-limit:]) if limit > 0 else []

    def pending_jobs(self) -> list[Job]:
        with self._lock:
            return list(self._pending)

    def reset(self) -> None:
        with self._lock:
            self._pending.clear()
            self._active.clear()
            self._completed.clear()
            self._failed.clear()
            self._counters = dict.fromkeys(COUNTER_NAMES, 0)

    def _release(self, job: Job) -> None:
        self._active = [a for a in self._active if a.job_id != job.job_id]
