from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"text": "Buy milk"}})

    text: str = Field(..., description="Text of the todo item")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for replacing the text of an existing Todo item.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"text": "Buy oat milk"}})

    text: str = Field(..., description="New text of the todo item")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.

    ``completed`` and ``created_at`` are only present when the underlying
    table has those columns; routes serialize with ``exclude_unset``.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "text": "Buy milk",
                "completed": False,
                "created_at": "2025-01-25T10:15:30.123456",
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    text: str = Field(..., description="Text of the todo item")
    completed: Optional[bool] = Field(default=None, description="Completion status flag")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp")


class PaginatedTodos(BaseModel):
    """
    Envelope for the paginated list endpoint.
    """

    model_config = ConfigDict(populate_by_name=True)

    todos: List[TodoOut] = Field(..., description="Todo items of the requested page")
    current_page: int = Field(..., alias="currentPage", description="Requested page number")
    total_pages: int = Field(..., alias="totalPages", description="ceil(totalCount / limit)")
    total_count: int = Field(..., alias="totalCount", description="Number of rows in the table")


class CountOut(BaseModel):
    count: int = Field(..., description="Number of rows in the table")


class MessageOut(BaseModel):
    message: str


class ErrorOut(BaseModel):
    error: str = Field(..., description="Raw data store error message")
