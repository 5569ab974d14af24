from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"

Todo = Dict[str, Any]


# PUBLIC_INTERFACE
class TodoListView:
    """
    View-model for a todo list backed by the todo API.

    State:
    - todos: the locally held list of todos
    - input: the text of the "add a todo" field

    Each action issues one request and updates local state from the response.
    Failures are logged and leave local state untouched, except that a
    delete drops the item once the request completes, whatever the status.
    There is no retry and no rollback, so state may drift from the server
    until the next ``mount``.
    """

    def __init__(self, client: Optional[httpx.Client] = None, base_url: str = DEFAULT_BASE_URL) -> None:
        self._client = client if client is not None else httpx.Client(base_url=base_url)
        self.todos: List[Todo] = []
        self.input = ""

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        response = self._client.request(method, url, **kwargs)
        response.raise_for_status()
        return response.json()

    def mount(self) -> None:
        """Fetch every todo and replace local state."""
        try:
            self.todos = self._request("GET", "/todos")
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error fetching todos: %s", exc)

    def add(self) -> None:
        """Create a todo from the trimmed input, then clear the input."""
        text = self.input.strip()
        if not text:
            return
        try:
            created = self._request("POST", "/todos", json={"text": text})
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error adding todo: %s", exc)
            return
        self.todos = [*self.todos, created]
        self.input = ""

    def edit(self, todo_id: int, text: str) -> None:
        """Send the new text (called on every change, not debounced)."""
        try:
            updated = self._request("PUT", f"/todos/{todo_id}", json={"text": text})
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error editing todo: %s", exc)
            return
        if updated is None:
            logger.error("Error editing todo: no todo with id %s", todo_id)
            return
        self.todos = [updated if todo["id"] == todo_id else todo for todo in self.todos]

    def delete(self, todo_id: int) -> None:
        """Delete a todo on the server, then drop it locally once the request completes."""
        try:
            response = self._client.request("DELETE", f"/todos/{todo_id}")
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error deleting todo: %s", exc)
            return
        if response.is_error:
            logger.error("Error deleting todo: HTTP %s", response.status_code)
        self.todos = [todo for todo in self.todos if todo["id"] != todo_id]

    def close(self) -> None:
        self._client.close()
