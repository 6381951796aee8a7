"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
connection pool access and the borrow/commit/return cycle for statements.
"""

from contextlib import contextmanager
from typing import Any, Iterator, TypeVar, Generic

from psycopg2.extensions import cursor as Cursor
from psycopg2.extras import RealDictCursor
from psycopg2.pool import AbstractConnectionPool


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Connection pool access via self._pool
    - A cursor context manager that commits on success and rolls back on error
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle row-to-Pydantic model mapping internally.

    Example:
        class UserRepository(BaseRepository[User]):
            def get_by_id(self, user_id: int) -> Optional[User]:
                with self._cursor() as cur:
                    cur.execute("SELECT * FROM users WHERE id = %s", (user_id,))
                    row = cur.fetchone()
                return self._map_to_user(row) if row else None
    """

    def __init__(self, pool: AbstractConnectionPool) -> None:
        """
        Initialize the repository with a connection pool.

        Args:
            pool: psycopg2 connection pool used for every statement.
        """
        self._pool = pool

    @contextmanager
    def _cursor(self) -> Iterator[Cursor]:
        """
        Borrow a connection and yield a dict-row cursor on it.

        The transaction is committed when the block exits normally and
        rolled back when it raises. The connection always goes back to
        the pool.
        """
        conn = self._pool.getconn()
        try:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                yield cur
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._pool.putconn(conn)

    def ping(self) -> bool:
        """Run a trivial query to check connectivity."""
        with self._cursor() as cur:
            cur.execute("SELECT 1 AS ok")
            row: dict[str, Any] = cur.fetchone()
        return bool(row and row["ok"] == 1)
