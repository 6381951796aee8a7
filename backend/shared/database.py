"""
Database connection pool factory for PostgreSQL.

The pool is the only piece of shared state in the process. Every
repository call borrows a connection for the duration of one statement
and hands it back.
"""

from typing import Optional
from psycopg2.pool import ThreadedConnectionPool

from .config import get_settings

# Module-level pool cache
_pool: Optional[ThreadedConnectionPool] = None


def get_connection_pool() -> ThreadedConnectionPool:
    """
    Get the PostgreSQL connection pool, creating it on first use.

    Returns:
        Thread-safe connection pool configured from settings

    Raises:
        RuntimeError: If DATABASE_URL is not configured
    """
    global _pool

    if _pool is None:
        settings = get_settings()
        if not settings.database_url:
            raise RuntimeError(
                "Database configuration missing. "
                "Set the DATABASE_URL environment variable."
            )
        _pool = ThreadedConnectionPool(
            settings.db_pool_min_size,
            settings.db_pool_max_size,
            dsn=settings.database_url,
        )

    return _pool


def close_connection_pool() -> None:
    """Close every pooled connection and forget the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
    _pool = None


def reset_pool_cache() -> None:
    """
    Reset the cached pool without closing it.

    Useful for testing or when configuration changes.
    """
    global _pool
    _pool = None
