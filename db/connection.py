"""
db/connection.py
----------------
Process-wide PostgreSQL pool for the record store.

Flask serves each request on its own thread, so the pool is a
ThreadedConnectionPool: every repository call borrows one connection and
hands it back in a ``finally`` block. Row-level concurrency is left to
PostgreSQL; nothing here locks records.
"""

import psycopg2
from psycopg2 import pool
from config import DATABASE_URL
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.ThreadedConnectionPool | None = None


def init_pool(min_conn: int = 1, max_conn: int = 10, dsn: str | None = None) -> None:
    """
    Open the shared pool once at startup. Later calls are no-ops.

    Args:
        min_conn: Connections opened eagerly.
        max_conn: Upper bound, which caps concurrent requests touching the store.
        dsn: Connection string; defaults to DATABASE_URL.

    Raises:
        psycopg2.OperationalError: If the record store is unreachable. main.py
            treats this as fatal.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.ThreadedConnectionPool(min_conn, max_conn, dsn or DATABASE_URL)
        logger.info(f"Record store pool ready ({min_conn}-{max_conn} connections).")
    except psycopg2.OperationalError as e:
        logger.error(f"Cannot open the record store pool: {e}")
        raise


def get_connection():
    """
    Borrow a connection for one repository operation.

    Raises:
        RuntimeError: If init_pool() has not run (the API was built without
            main.py, and no fake repositories were injected).
    """
    if _pool is None:
        raise RuntimeError("Record store pool not initialized. Call init_pool() first.")
    return _pool.getconn()


def release_connection(conn) -> None:
    """Hand a borrowed connection back; ignored after close_pool()."""
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close every pooled connection on server shutdown."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Record store pool closed.")
