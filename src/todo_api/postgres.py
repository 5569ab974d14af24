from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Generator, List, Optional, Tuple

import psycopg
from psycopg import errors
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from .errors import MissingTableError, StoreError
from .models import TodoEntity
from .repositories import Repository

logger = logging.getLogger(__name__)


class PostgresRepository(Repository):
    """
    PostgreSQL repository over a psycopg connection pool.

    The pool is owned by the repository: ``from_url`` opens it and ``close``
    drains it. A missing table is recognised by its SQLSTATE (42P01,
    ``UndefinedTable``) rather than by the message text.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    @classmethod
    def from_url(cls, url: str) -> "PostgresRepository":
        pool = ConnectionPool(url, kwargs={"row_factory": dict_row}, open=False)
        pool.open()
        logger.info("Opened PostgreSQL connection pool")
        return cls(pool)

    @contextmanager
    def _conn(self) -> Generator[Any, None, None]:
        try:
            with self._pool.connection() as conn:
                yield conn
        except errors.UndefinedTable as exc:
            raise MissingTableError(str(exc)) from exc
        except psycopg.Error as exc:
            raise StoreError(str(exc)) from exc

    def _insert(self, text: str) -> TodoEntity:
        with self._conn() as conn:
            return conn.execute("INSERT INTO todos (text) VALUES (%s) RETURNING *", (text,)).fetchone()

    def _create_table(self) -> None:
        with self._conn() as conn:
            conn.execute("CREATE TABLE todos (id SERIAL PRIMARY KEY, text VARCHAR(255) NOT NULL)")

    def ensure_schema(self) -> None:
        with self._conn() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS todos (
                    id SERIAL PRIMARY KEY,
                    text VARCHAR(255) NOT NULL,
                    completed BOOLEAN NOT NULL DEFAULT FALSE,
                    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
                )
                """
            )

    def list_all(self) -> List[TodoEntity]:
        with self._conn() as conn:
            return conn.execute("SELECT * FROM todos ORDER BY id").fetchall()

    def update_text(self, todo_id: int, text: str) -> Optional[TodoEntity]:
        with self._conn() as conn:
            return conn.execute(
                "UPDATE todos SET text = %s WHERE id = %s RETURNING *", (text, todo_id)
            ).fetchone()

    def delete(self, todo_id: int) -> None:
        with self._conn() as conn:
            conn.execute("DELETE FROM todos WHERE id = %s", (todo_id,))

    def list_page(self, limit: int, offset: int) -> Tuple[List[TodoEntity], int]:
        with self._conn() as conn:
            rows = conn.execute(
                "SELECT * FROM todos ORDER BY id LIMIT %s OFFSET %s", (limit, offset)
            ).fetchall()
            count_row = conn.execute("SELECT COUNT(*) AS count FROM todos").fetchone()
            return rows, int(count_row["count"])

    def search(self, text: str) -> List[TodoEntity]:
        with self._conn() as conn:
            return conn.execute(
                "SELECT * FROM todos WHERE text ILIKE %s ORDER BY id", (f"%{text}%",)
            ).fetchall()

    def list_between(self, start: datetime, end: datetime) -> List[TodoEntity]:
        with self._conn() as conn:
            return conn.execute(
                "SELECT * FROM todos WHERE created_at BETWEEN %s AND %s ORDER BY id", (start, end)
            ).fetchall()

    def count(self) -> int:
        with self._conn() as conn:
            row = conn.execute("SELECT COUNT(*) AS count FROM todos").fetchone()
            return int(row["count"])

    def complete(self, todo_id: int) -> Optional[TodoEntity]:
        with self._conn() as conn:
            return conn.execute(
                "UPDATE todos SET completed = TRUE WHERE id = %s RETURNING *", (todo_id,)
            ).fetchone()

    def close(self) -> None:
        self._pool.close()
        logger.info("Closed PostgreSQL connection pool")
