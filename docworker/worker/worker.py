import time
from collections.abc import Callable

from docworker.config.settings import Settings
from docworker.logging.logger import Log
from docworker.queue.base import BaseQueueStore
from docworker.queue.models import Job
from docworker.worker.job_runner import JobRunner


class Worker:
    """Poll loop: dequeue -> dispatch, or sleep when the queue is empty."""

    def __init__(
        self,
        queue_store: BaseQueueStore,
        job_runner: JobRunner,
        settings: Settings,
        reconnect: Callable[[], None] | None = None,
    ) -> None:
        self._queue = queue_store
        self._job_runner = job_runner
        self._settings = settings
        self._reconnect = reconnect

    def run(self, max_jobs: int | None = None) -> None:
        """Main poll loop. Runs forever until interrupted.

        If max_jobs is set, stop after resolving that many jobs (for testing).
        """
        Log.info("Worker started, polling for jobs")
        jobs_done = 0
        try:
            while max_jobs is None or jobs_done < max_jobs:
                if self.run_once():
                    jobs_done += 1
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")

    def run_once(self) -> bool:
        """One loop iteration. Returns True if a job was dispatched and resolved."""
        job: Job | None = None
        try:
            job = self._try_dequeue()
            if job is None:
                Log.debug("No jobs available, sleeping")
                time.sleep(self._settings.job_poll_interval_seconds)
                return False
            self._job_runner.run(job)
            return True
        except Exception as exc:
            self._recover(exc, job)
            return False

    def _try_dequeue(self) -> Job | None:
        return self._queue.dequeue()

    def _recover(self, exc: Exception, job: Job | None = None) -> None:
        """Back off after an infrastructure error, reconnect, then release the leased job."""
        Log.exception(
            f"Worker iteration failed, retrying in "
            f"{self._settings.worker_error_backoff_seconds}s: {exc}"
        )
        time.sleep(self._settings.worker_error_backoff_seconds)
        if self._reconnect is not None:
            try:
                self._reconnect()
            except Exception as reconnect_exc:
                Log.error(f"Reconnect failed, will retry: {reconnect_exc}")
        if job is not None:
            self._release(job, str(exc) or type(exc).__name__)

    def _release(self, job: Job, message: str) -> None:
        try:
            self._job_runner.release(job, message)
        except Exception as release_exc:
            Log.error(
                f"Could not release job {job.job_id}, its lease stays until it expires: "
                f"{release_exc}"
            )
