from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import psycopg
from psycopg_pool import ConnectionPool

from docworker.config.settings import Settings
from docworker.logging.logger import Log

_SCHEMA_PATH = Path(__file__).parent / "schema.sql"

_pool: ConnectionPool | None = None


def _conninfo(settings: Settings) -> str:
    return (
        f"host={settings.db_host} "
        f"port={settings.db_port} "
        f"dbname={settings.db_database} "
        f"user={settings.db_username} "
        f"password={settings.db_password} "
        f"connect_timeout={settings.db_connect_timeout_seconds}"
    )


def init_pool(settings: Settings) -> None:
    """Initialize the global connection pool and wait until it can serve connections.

    Raises:
        psycopg_pool.PoolTimeout: if the database is unreachable within the connect timeout.
    """
    global _pool  # noqa: PLW0603
    _pool = ConnectionPool(
        _conninfo(settings),
        min_size=1,
        max_size=settings.db_pool_max_size,
        timeout=settings.db_connect_timeout_seconds,
        kwargs={"options": f"-c statement_timeout={settings.db_statement_timeout_ms}"},
    )
    _pool.wait(timeout=settings.db_connect_timeout_seconds)


def close_pool() -> None:
    """Close the global connection pool."""
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


def reset_pool(settings: Settings) -> None:
    """Drop every pooled connection and reconnect from scratch."""
    Log.info("Re-establishing database connection pool")
    close_pool()
    init_pool(settings)


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Yield a connection from the pool. Caller manages commit/rollback."""
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn


def init_schema(schema_path: Path | None = None) -> None:
    """Create the documents and queue tables if they do not exist yet."""
    path = schema_path or _SCHEMA_PATH
    statements = [s.strip() for s in path.read_text(encoding="utf-8").split(";")]
    with get_connection() as conn:
        with conn.cursor() as cur:
            for statement in statements:
                if statement:
                    cur.execute(statement)
        conn.commit()
    Log.info(f"Database schema ensured from {path.name}")
