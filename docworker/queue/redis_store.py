from dataclasses import replace
from typing import Any

import redis

from docworker.logging.logger import Log
from docworker.queue.base import COUNTER_NAMES, BaseQueueStore, Outcome
from docworker.queue.exceptions import MalformedJobError, QueueStoreError
from docworker.queue.models import Job, QueueStatus

# Pop the pending head, lease it and move the counters in one server-side step.
_DEQUEUE_SCRIPT = """
local item = redis.call('LPOP', KEYS[1])
if not item then
    return false
end
redis.call('RPUSH', KEYS[2], item)
redis.call('HINCRBY', KEYS[3], 'waiting', -1)
redis.call('HINCRBY', KEYS[3], 'active', 1)
return item
"""


class RedisQueueStore(BaseQueueStore):
    """Queue store on Redis lists plus a counters hash."""

    PENDING_KEY = "document_processing_queue"
    ACTIVE_KEY = "document_processing_active"
    COMPLETED_KEY = "completed_documents"
    FAILED_KEY = "failed_documents"
    COUNTERS_KEY = "queue_counters"

    def __init__(self, client: redis.Redis) -> None:
        self._client = client
        self._dequeue_script = client.register_script(_DEQUEUE_SCRIPT)

    @classmethod
    def from_url(cls, url: str, socket_timeout_seconds: int) -> "RedisQueueStore":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout_seconds,
            socket_connect_timeout=socket_timeout_seconds,
        )
        return cls(client)

    def enqueue(self, document_id: str, owner_id: str) -> Job:
        job = Job(document_id=document_id, owner_id=owner_id)
        pipe = self._client.pipeline(transaction=True)
        pipe.rpush(self.PENDING_KEY, job.to_json())
        pipe.hincrby(self.COUNTERS_KEY, "waiting", 1)
        pipe.execute()
        return job

    def dequeue(self) -> Job | None:
        raw = self._dequeue_script(
            keys=[self.PENDING_KEY, self.ACTIVE_KEY, self.COUNTERS_KEY]
        )
        if not raw:
            return None
        try:
            return Job.from_json(raw)
        except MalformedJobError as exc:
            Log.error(f"Dropping malformed queue item {raw!r}: {exc}")
            self._resolve(raw, self.FAILED_KEY, raw, "failed")
            return None

    def active_jobs(self) -> list[Job]:
        jobs: list[Job] = []
        for raw in self._client.lrange(self.ACTIVE_KEY, 0, -1):
            try:
                jobs.append(Job.from_json(raw))
            except MalformedJobError:
                continue
        return jobs

    def mark_completed(self, job: Job) -> None:
        self._resolve(_leased(job), self.COMPLETED_KEY, job.to_json(), "completed")

    def mark_failed(self, job: Job, reason: str) -> None:
        record = replace(job, error_message=reason).to_json()
        self._resolve(_leased(job), self.FAILED_KEY, record, "failed")

    def status(self) -> QueueStatus:
        counters: dict[str, Any] = self._client.hgetall(self.COUNTERS_KEY) or {}
        return QueueStatus.from_counters(
            {name: int(counters.get(name, 0)) for name in COUNTER_NAMES}
        )

    def history(self, outcome: Outcome, limit: int = 50) -> list[Job]:
        if limit <= 0:
            return []
        key = self.COMPLETED_KEY if outcome == "completed" else self.FAILED_KEY
        jobs: list[Job] = []
        for raw in self._client.lrange(key, -limit, -1):
            try:
                jobs.append(Job.from_json(raw))
            except MalformedJobError:
                continue
        return jobs

    def reset(self) -> None:
        Log.info("Resetting queue lists and counters")
        pipe = self._client.pipeline(transaction=True)
        pipe.delete(
            self.PENDING_KEY,
            self.ACTIVE_KEY,
            self.COMPLETED_KEY,
            self.FAILED_KEY,
            self.COUNTERS_KEY,
        )
        pipe.hset(self.COUNTERS_KEY, mapping=dict.fromkeys(COUNTER_NAMES, 0))
        pipe.execute()

    def ping(self) -> None:
        try:
            self._client.ping()
        except redis.RedisError as exc:
            raise QueueStoreError(f"Redis unreachable: {exc}") from exc

    def close(self) -> None:
        self._client.close()

    def _resolve(self, leased: str, target_key: str, record: str, counter: str) -> None:
        pipe = self._client.pipeline(transaction=True)
        pipe.lrem(self.ACTIVE_KEY, 1, leased)
        pipe.rpush(target_key, record)
        pipe.hincrby(self.COUNTERS_KEY, "active", -1)
        pipe.hincrby(self.COUNTERS_KEY, counter, 1)
        pipe.execute()


def _leased(job: Job) -> str:
    """The active-list entry for a job: the string it was popped as, else its canonical form."""
    return job.raw if job.raw is not None else job.to_json()
