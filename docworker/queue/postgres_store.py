from typing import Any

import psycopg
from psycopg.rows import dict_row

from docworker.database.connection import get_connection
from docworker.queue.base import COUNTER_NAMES, BaseQueueStore, Outcome
from docworker.queue.models import Job, QueueStatus, now_ms

# Moving a row to the tail of another list takes a fresh sequence value.
_NEXT_POSITION = "nextval(pg_get_serial_sequence('queue_jobs', 'position'))"


class PostgresQueueStore(BaseQueueStore):
    """Queue store backed by the queue_jobs and queue_counters tables.

    Each operation runs in one transaction, so a job and its counter change
    become visible together.
    """

    def enqueue(self, document_id: str, owner_id: str) -> Job:
        job = Job(document_id=document_id, owner_id=owner_id)
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO queue_jobs (job_id, list_name, document_id, owner_id, enqueued_at)
                VALUES (%s, 'waiting', %s, %s, %s)
                """,
                (job.job_id, job.document_id, job.owner_id, job.enqueued_at),
            )
            self._bump(conn, waiting=1)
            conn.commit()
        return job

    def dequeue(self) -> Job | None:
        """Lease the oldest waiting job using FOR UPDATE SKIP LOCKED."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    UPDATE queue_jobs
                    SET list_name = 'active', position = {_NEXT_POSITION}
                    WHERE position = (
                        SELECT position FROM queue_jobs
                        WHERE list_name = 'waiting'
                        ORDER BY position
                        LIMIT 1
                        FOR UPDATE SKIP LOCKED
                    )
                    RETURNING job_id, document_id, owner_id, enqueued_at
                    """
                )
                row = cur.fetchone()
            if row is None:
                conn.rollback()
                return None
            self._bump(conn, waiting=-1, active=1)
            conn.commit()
        return self._to_job(row)

    def active_jobs(self) -> list[Job]:
        return self._select_list("active")

    def mark_completed(self, job: Job) -> None:
        self._finish(job, "completed", None)

    def mark_failed(self, job: Job, reason: str) -> None:
        self._finish(job, "failed", reason)

    def status(self) -> QueueStatus:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT name, value FROM queue_counters")
                rows = cur.fetchall()
        return QueueStatus.from_counters({name: value for name, value in rows})

    def history(self, outcome: Outcome, limit: int = 50) -> list[Job]:
        jobs = self._select_list(outcome, limit=limit, newest_first=True)
        return list(reversed(jobs))

    def reset(self) -> None:
        with get_connection() as conn:
            conn.execute("DELETE FROM queue_jobs")
            conn.execute("UPDATE queue_counters SET value = 0")
            for name in COUNTER_NAMES:
                conn.execute(
                    """
                    INSERT INTO queue_counters (name, value) VALUES (%s, 0)
                    ON CONFLICT (name) DO NOTHING
                    """,
                    (name,),
                )
            conn.commit()

    def ping(self) -> None:
        with get_connection() as conn:
            conn.execute("SELECT 1 FROM queue_counters LIMIT 1")

    def _finish(self, job: Job, outcome: Outcome, reason: str | None) -> None:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    UPDATE queue_jobs
                    SET list_name = %s, error_message = %s, finished_at = %s,
                        position = {_NEXT_POSITION}
                    WHERE job_id = %s AND list_name = 'active'
                    """,
                    (outcome, reason, now_ms(), job.job_id),
                )
                if cur.rowcount == 0:
                    # Lease already gone (e.g. reset); still keep the record.
                    cur.execute(
                        """
                        INSERT INTO queue_jobs (
                            job_id, list_name, document_id, owner_id,
                            enqueued_at, error_message, finished_at
                        )
                        VALUES (%s, %s, %s, %s, %s, %s, %s)
                        """,
                        (
                            job.job_id,
                            outcome,
                            job.document_id,
                            job.owner_id,
                            job.enqueued_at,
                            reason,
                            now_ms(),
                        ),
                    )
            self._bump(conn, active=-1, **{outcome: 1})
            conn.commit()

    def _select_list(
        self,
        list_name: str,
        limit: int | None = None,
        newest_first: bool = False,
    ) -> list[Job]:
        order = "DESC" if newest_first else "ASC"
        query = f"""
            SELECT job_id, document_id, owner_id, enqueued_at, error_message
            FROM queue_jobs
            WHERE list_name = %s
            ORDER BY position {order}
        """
        params: tuple[Any, ...] = (list_name,)
        if limit is not None:
            query += " LIMIT %s"
            params = (list_name, limit)
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, params)
                rows = cur.fetchall()
        return [self._to_job(row) for row in rows]

    @staticmethod
    def _bump(conn: psycopg.Connection[Any], **deltas: int) -> None:
        for name, delta in deltas.items():
            conn.execute(
                "UPDATE queue_counters SET value = value + %s WHERE name = %s",
                (delta, name),
            )

    @staticmethod
    def _to_job(row: dict[str, Any]) -> Job:
        return Job(
            document_id=row["document_id"],
            owner_id=row["owner_id"],
            enqueued_at=row["enqueued_at"],
            job_id=row["job_id"],
            error_message=row.get("error_message"),
        )
