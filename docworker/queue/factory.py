from docworker.config.settings import Settings
from docworker.queue.base import BaseQueueStore
from docworker.queue.memory_store import InMemoryQueueStore
from docworker.queue.postgres_store import PostgresQueueStore
from docworker.queue.redis_store import RedisQueueStore


class QueueStoreFactory:
    """Creates the queue store selected by settings."""

    BACKENDS = ("postgres", "redis", "memory")

    @classmethod
    def create(cls, settings: Settings) -> BaseQueueStore:
        backend = settings.queue_backend.lower()
        if backend == "postgres":
            return PostgresQueueStore()
        if backend == "redis":
            return RedisQueueStore.from_url(
                settings.redis_url,
                socket_timeout_seconds=settings.redis_socket_timeout_seconds,
            )
        if backend == "memory":
            return InMemoryQueueStore()
        raise ValueError(
            f"Unknown queue backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
