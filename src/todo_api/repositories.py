from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from fastapi import Request

from .errors import MissingTableError
from .models import TodoEntity
from .settings import Settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Repository(ABC):
    """
    Abstract repository contract for the todos table.

    Every method is a single round trip to the store, except ``create``,
    which provisions a minimal table and retries once when the table is
    missing. Implementations raise ``StoreError`` (or ``MissingTableError``)
    for driver failures.
    """

    def create(self, text: str) -> TodoEntity:
        """Insert a todo, creating the table first if it does not exist yet."""
        try:
            return self._insert(text)
        except MissingTableError:
            logger.warning("todos table is missing; creating it and retrying the insert")
            self._create_table()
            return self._insert(text)

    @abstractmethod
    def _insert(self, text: str) -> TodoEntity:
        """Insert one row and return it."""

    @abstractmethod
    def _create_table(self) -> None:
        """Create the minimal (id, text) todos table."""

    @abstractmethod
    def ensure_schema(self) -> None:
        """Create the full todos table (id, text, completed, created_at) if absent."""

    @abstractmethod
    def list_all(self) -> List[TodoEntity]:
        """Return every row."""

    @abstractmethod
    def update_text(self, todo_id: int, text: str) -> Optional[TodoEntity]:
        """Replace the text of a row. Return the updated row or None if not found."""

    @abstractmethod
    def delete(self, todo_id: int) -> None:
        """Delete a row by id. Deleting a missing id is not an error."""

    @abstractmethod
    def list_page(self, limit: int, offset: int) -> Tuple[List[TodoEntity], int]:
        """Return a window of rows ordered by id, and the total row count."""

    @abstractmethod
    def search(self, text: str) -> List[TodoEntity]:
        """Return rows whose text contains ``text``, ignoring case."""

    @abstractmethod
    def list_between(self, start: datetime, end: datetime) -> List[TodoEntity]:
        """Return rows whose created_at lies in [start, end]."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of rows."""

    @abstractmethod
    def complete(self, todo_id: int) -> Optional[TodoEntity]:
        """Mark a row completed. Return the updated row or None if not found."""

    def close(self) -> None:
        """Release the connection source."""


def _sqlite_path(url: str) -> str:
    # sqlite:///relative/path and sqlite:////absolute/path
    path = url[len("sqlite:///"):] if url.startswith("sqlite:///") else url[len("sqlite://"):]
    if not path:
        raise ValueError(f"DATABASE_URL has no database path: {url!r}")
    return path


# PUBLIC_INTERFACE
def open_repository(settings: Settings) -> Repository:
    """
    Open the repository selected by ``settings.database_url``.
    - postgres:// or postgresql://: PostgresRepository backed by a connection pool
    - sqlite:///path: SQLiteRepository on a database file
    """
    url = settings.database_url
    scheme = url.split("://", 1)[0].lower() if "://" in url else ""
    if scheme in {"postgres", "postgresql"}:
        from .postgres import PostgresRepository

        repo: Repository = PostgresRepository.from_url(url)
    elif scheme == "sqlite":
        from .db import SQLiteRepository

        repo = SQLiteRepository(_sqlite_path(url))
    else:
        raise ValueError(f"Unsupported DATABASE_URL scheme: {scheme or url!r}")

    if settings.init_schema:
        try:
            repo.ensure_schema()
        except Exception:
            repo.close()
            raise
    return repo


# PUBLIC_INTERFACE
def get_repository(request: Request) -> Repository:
    """FastAPI dependency returning the repository opened by the app lifespan."""
    return request.app.state.repository
