from abc import ABC, abstractmethod
from typing import Literal

from docworker.queue.models import Job, QueueStatus

Outcome = Literal["completed", "failed"]

COUNTER_NAMES = ("waiting", "active", "completed", "failed")


class BaseQueueStore(ABC):
    """Contract for the durable FIFO job queue and its status counters.

    Counters are approximate monitoring values. Only ``dequeue`` and the
    active set take part in correctness.
    """

    @abstractmethod
    def enqueue(self, document_id: str, owner_id: str) -> Job:
        """Append a job to the tail of the pending list and bump ``waiting``."""

    @abstractmethod
    def dequeue(self) -> Job | None:
        """Atomically move the pending head into the active set.

        Returns:
            The leased job, or None when nothing is pending.
        """

    @abstractmethod
    def active_jobs(self) -> list[Job]:
        """Currently leased jobs, earliest lease first."""

    @abstractmethod
    def mark_completed(self, job: Job) -> None:
        """Release the lease and append the job to the completed history."""

    @abstractmethod
    def mark_failed(self, job: Job, reason: str) -> None:
        """Release the lease and append the job with ``reason`` to the failed history."""

    @abstractmethod
    def status(self) -> QueueStatus:
        """Current counters with a timestamp."""

    @abstractmethod
    def history(self, outcome: Outcome, limit: int = 50) -> list[Job]:
        """Most recent terminal records for ``outcome``, oldest first."""

    @abstractmethod
    def reset(self) -> None:
        """Drop every list and zero the counters.

        Startup only: jobs in flight at the time of a reset are lost.
        """

    def ping(self) -> None:
        """Raise if the backend is unreachable."""

    def close(self) -> None:
        """Release backend resources."""
