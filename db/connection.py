"""
db/connection.py
----------------
Holds the café console's one PostgreSQL session.
main.py opens it from the command-line DSN before the first menu is shown,
repositories borrow it per call and hand it back, and it is closed on
log-off, EOF or Ctrl-C. psycopg2's SimpleConnectionPool capped at one
connection does the bookkeeping; returning a connection rolls back any
transaction a failed call left open.
"""

import psycopg2
from psycopg2 import pool

from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None


def init_pool(dsn: str, min_conn: int = 1, max_conn: int = 1) -> None:
    """
    Open the session's connection. A second call is a no-op.

    Args:
        dsn: libpq connection URL (see ``config.build_dsn``).
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, dsn)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


def get_connection():
    """
    Borrow the session connection.

    Returns:
        A psycopg2 connection object.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool.getconn()


def release_connection(conn) -> None:
    """
    Hand the session connection back after a repository call.

    Args:
        conn: The psycopg2 connection to release.
    """
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close the session connection; safe to call when never opened."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")
