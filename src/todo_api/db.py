from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Generator, List, Optional, Tuple

from .errors import MissingTableError, StoreError
from .models import TodoEntity
from .repositories import Repository

logger = logging.getLogger(__name__)

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _translate_error(exc: sqlite3.Error) -> StoreError:
    # sqlite reports a missing table as a generic SQLITE_ERROR; the message is all there is.
    if isinstance(exc, sqlite3.OperationalError) and str(exc).startswith("no such table"):
        return MissingTableError(str(exc))
    return StoreError(str(exc))


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


def _timestamp(value: datetime) -> str:
    # created_at is stored as naive UTC (CURRENT_TIMESTAMP)
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(_TIMESTAMP_FORMAT)


class SQLiteRepository(Repository):
    """
    SQLite repository. Opens one connection per unit of work.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        logger.info("Using SQLite database at %s", db_path)

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        try:
            conn = sqlite3.connect(self._db_path)
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        conn.row_factory = sqlite3.Row
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            raise _translate_error(exc) from exc
        except OverflowError as exc:
            # integers beyond SQLite's 64-bit range fail while binding parameters
            raise StoreError(str(exc)) from exc
        finally:
            conn.close()

    def _row_to_entity(self, row: sqlite3.Row) -> TodoEntity:
        entity = dict(row)
        if entity.get("completed") is not None:
            entity["completed"] = bool(entity["completed"])
        if isinstance(entity.get("created_at"), str):
            entity["created_at"] = datetime.fromisoformat(entity["created_at"])
        return entity  # type: ignore[return-value]

    def _fetch(self, conn: sqlite3.Connection, todo_id: int) -> Optional[TodoEntity]:
        row = conn.execute("SELECT * FROM todos WHERE id = ?", (todo_id,)).fetchone()
        return self._row_to_entity(row) if row else None

    def _insert(self, text: str) -> TodoEntity:
        with self._conn() as conn:
            cur = conn.execute("INSERT INTO todos (text) VALUES (?)", (text,))
            entity = self._fetch(conn, cur.lastrowid)
            assert entity is not None
            return entity

    def _create_table(self) -> None:
        with self._conn() as conn:
            conn.execute(
                "CREATE TABLE todos (id INTEGER PRIMARY KEY AUTOINCREMENT, text VARCHAR(255) NOT NULL)"
            )

    def ensure_schema(self) -> None:
        with self._conn() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS todos (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    text VARCHAR(255) NOT NULL,
                    completed BOOLEAN NOT NULL DEFAULT 0,
                    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
                )
                """
            )

    def list_all(self) -> List[TodoEntity]:
        with self._conn() as conn:
            rows = conn.execute("SELECT * FROM todos ORDER BY id").fetchall()
            return [self._row_to_entity(r) for r in rows]

    def update_text(self, todo_id: int, text: str) -> Optional[TodoEntity]:
        with self._conn() as conn:
            conn.execute("UPDATE todos SET text = ? WHERE id = ?", (text, todo_id))
            return self._fetch(conn, todo_id)

    def delete(self, todo_id: int) -> None:
        with self._conn() as conn:
            conn.execute("DELETE FROM todos WHERE id = ?", (todo_id,))

    def list_page(self, limit: int, offset: int) -> Tuple[List[TodoEntity], int]:
        with self._conn() as conn:
            rows = conn.execute(
                "SELECT * FROM todos ORDER BY id LIMIT ? OFFSET ?", (limit, offset)
            ).fetchall()
            count_row = conn.execute("SELECT COUNT(*) AS count FROM todos").fetchone()
            return [self._row_to_entity(r) for r in rows], int(count_row["count"])

    def search(self, text: str) -> List[TodoEntity]:
        # LIKE alone only folds ASCII case
        with self._conn() as conn:
            rows = conn.execute(
                "SELECT * FROM todos WHERE casefold(text) LIKE casefold(?) ORDER BY id", (f"%{text}%",)
            ).fetchall()
            return [self._row_to_entity(r) for r in rows]

    def list_between(self, start: datetime, end: datetime) -> List[TodoEntity]:
        with self._conn() as conn:
            rows = conn.execute(
                "SELECT * FROM todos WHERE created_at BETWEEN ? AND ? ORDER BY id",
                (_timestamp(start), _timestamp(end)),
            ).fetchall()
            return [self._row_to_entity(r) for r in rows]

    def count(self) -> int:
        with self._conn() as conn:
            row = conn.execute("SELECT COUNT(*) AS count FROM todos").fetchone()
            return int(row["count"])

    def complete(self, todo_id: int) -> Optional[TodoEntity]:
        with self._conn() as conn:
            conn.execute("UPDATE todos SET completed = 1 WHERE id = ?", (todo_id,))
            return self._fetch(conn, todo_id)
