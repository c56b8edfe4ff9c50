import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from docworker.config.settings import Settings
from docworker.database.connection import close_pool, get_connection, init_pool, init_schema
from docworker.queue.postgres_store import PostgresQueueStore


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docworker_test")
    os.environ.setdefault("DB_CONNECT_TIMEOUT_SECONDS", "3")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        init_schema()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run these tests")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def pg_queue(integration_pool: None) -> Generator[PostgresQueueStore, None, None]:
    store = PostgresQueueStore()
    store.reset()
    try:
        yield store
    finally:
        store.reset()


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    """Collects document ids to delete after the test."""
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for document_id in cleanup:
                cur.execute("DELETE FROM documents WHERE id = %s", (document_id,))
        conn.commit()
