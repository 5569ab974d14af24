from __future__ import annotations

from datetime import datetime
from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict, total=False):
    """
    A row of the todos table as returned by ``SELECT *``.

    Only ``id`` and ``text`` are guaranteed: a table provisioned by the
    insert fallback has no ``completed`` or ``created_at`` columns, and the
    row then carries only the columns that exist.

    Fields:
    - id: Store-assigned integer identifier
    - text: The todo text
    - completed: Completion flag
    - created_at: Creation timestamp
    """

    id: int
    text: str
    completed: bool
    created_at: datetime
