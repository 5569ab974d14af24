"""
Client view for the todo API.

``TodoListView`` keeps the list of todos in local state and syncs it with
the API over HTTP, one request per user action.
"""

from .view import TodoListView

__all__ = ["TodoListView"]
