from __future__ import annotations


# PUBLIC_INTERFACE
class StoreError(Exception):
    """
    A data store failure surfaced to clients as HTTP 500.

    The message is the raw driver message; it is returned verbatim in the
    ``{"error": ...}`` response body.
    """


# PUBLIC_INTERFACE
class MissingTableError(StoreError):
    """The todos table does not exist in the data store."""


TABLE_MISSING_MESSAGE = 'The "todos" table does not exist in the database.'
