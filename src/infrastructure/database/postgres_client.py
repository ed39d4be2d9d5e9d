"""PostgreSQL database client for local development.

Lets the profile sync write into a local PostgreSQL database instead of
Supabase when USE_LOCAL_DB=1.
"""
from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Any, Generator

from psycopg2 import pool, sql
from psycopg2.extras import RealDictCursor


def local_db_enabled() -> bool:
    return os.getenv("USE_LOCAL_DB", "0") == "1"


class PostgresClient:
    """PostgreSQL database client with connection pooling."""

    def __init__(self) -> None:
        """Initialize PostgreSQL connection pool."""
        try:
            self._pool: Any = pool.SimpleConnectionPool(
                minconn=1,
                maxconn=int(os.getenv("POSTGRES_POOL_MAX", "10")),
                host=os.getenv("POSTGRES_HOST", "localhost"),
                port=int(os.getenv("POSTGRES_PORT", "5432")),
                database=os.getenv("POSTGRES_DB", "postgres"),
                user=os.getenv("POSTGRES_USER", "postgres"),
                password=os.getenv("POSTGRES_PASSWORD", ""),
            )
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(f"Failed to initialize PostgreSQL connection pool: {exc}") from exc

    @contextmanager
    def get_connection(self) -> Generator[Any, None, None]:
        """Get a database connection from the pool.

        Yields:
            Database connection with automatic return to pool on exit.
        """
        conn = self._pool.getconn()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._pool.putconn(conn)

    @contextmanager
    def get_cursor(self) -> Generator[Any, None, None]:
        with self.get_connection() as conn:
            cursor = conn.cursor(cursor_factory=RealDictCursor)
            try:
                yield cursor
            finally:
                cursor.close()

    def execute_insert(self, query: str | sql.Composable, params: tuple = ()) -> dict[str, Any]:
        """Execute an INSERT query and return the inserted row.

        Args:
            query: SQL INSERT query (string or composed) with RETURNING clause.
            params: Query parameters.

        Returns:
            Inserted row as dictionary.
        """
        with self.get_cursor() as cursor:
            cursor.execute(query, params)
            result = cursor.fetchone()
            if not result:
                raise RuntimeError("Insert query did not return a row")
            return dict(result)

    def close(self) -> None:
        """Close all connections in the pool."""
        self._pool.closeall()


def create_postgres_client() -> PostgresClient | None:
    """Create the local PostgreSQL client if USE_LOCAL_DB=1, else None."""
    if not local_db_enabled():
        return None
    return PostgresClient()
