from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..errors import TABLE_MISSING_MESSAGE, MissingTableError, StoreError
from ..repositories import Repository, get_repository
from ..schemas import (
    CountOut,
    ErrorOut,
    MessageOut,
    PaginatedTodos,
    TodoCreate,
    TodoOut,
    TodoUpdate,
)
from ..utils import pagination_envelope, parse_int_param

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
    responses={500: {"model": ErrorOut, "description": "Data store error"}},
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    response_model_exclude_unset=True,
    summary="List Todos",
    description="Return every todo in the table.",
)
def list_todos(repo: Repository = Depends(get_repository)) -> List[TodoOut]:
    """
    List all todos. A missing table is reported with a dedicated message.
    """
    try:
        items = repo.list_all()
    except MissingTableError as exc:
        raise StoreError(TABLE_MISSING_MESSAGE) from exc
    return [TodoOut(**it) for it in items]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    response_model_exclude_unset=True,
    summary="Create Todo",
    description=(
        "Insert a todo and return the created row. If the todos table does not exist it is "
        "created with only the id and text columns and the insert is retried once."
    ),
)
def create_todo(payload: TodoCreate, repo: Repository = Depends(get_repository)) -> TodoOut:
    created = repo.create(payload.text)
    return TodoOut(**created)


# PUBLIC_INTERFACE
@router.get(
    "/paginated",
    response_model=PaginatedTodos,
    response_model_exclude_unset=True,
    summary="List Todos (paginated)",
    description=(
        "Return one page of todos ordered by id with the total count.\n\n"
        "page and limit default to 1 and 10 when absent, non-numeric or zero."
    ),
)
def list_todos_paginated(
    page: Optional[str] = Query(None, description="1-based page number"),
    limit: Optional[str] = Query(None, description="Page size"),
    repo: Repository = Depends(get_repository),
) -> PaginatedTodos:
    page_no = parse_int_param(page, 1)
    size = parse_int_param(limit, 10)
    items, total = repo.list_page(limit=size, offset=(page_no - 1) * size)
    return PaginatedTodos(**pagination_envelope(items=items, total=total, page=page_no, limit=size))


# PUBLIC_INTERFACE
@router.get(
    "/search",
    response_model=List[TodoOut],
    response_model_exclude_unset=True,
    summary="Search Todos",
    description="Case-insensitive substring match on the todo text.",
)
def search_todos(
    q: str = Query(..., description="Text to search for"),
    repo: Repository = Depends(get_repository),
) -> List[TodoOut]:
    return [TodoOut(**it) for it in repo.search(q)]


# PUBLIC_INTERFACE
@router.get(
    "/date-range",
    response_model=List[TodoOut],
    response_model_exclude_unset=True,
    summary="List Todos by creation date",
    description="Return todos whose created_at lies between start and end, inclusive.",
)
def list_todos_by_date_range(
    start: datetime = Query(..., description="Range start (ISO8601)"),
    end: datetime = Query(..., description="Range end (ISO8601)"),
    repo: Repository = Depends(get_repository),
) -> List[TodoOut]:
    return [TodoOut(**it) for it in repo.list_between(start, end)]


# PUBLIC_INTERFACE
@router.get("/count", response_model=CountOut, summary="Count Todos")
def count_todos(repo: Repository = Depends(get_repository)) -> CountOut:
    return CountOut(count=repo.count())


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=Optional[TodoOut],
    response_model_exclude_unset=True,
    summary="Update Todo",
    description="Replace the text of a todo. Returns null when no todo has the given id.",
)
def update_todo(
    todo_id: int, payload: TodoUpdate, repo: Repository = Depends(get_repository)
) -> Optional[TodoOut]:
    updated = repo.update_text(todo_id, payload.text)
    return TodoOut(**updated) if updated else None


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=MessageOut,
    summary="Delete Todo",
    description="Delete a todo. The response is the same whether or not the todo existed.",
)
def delete_todo(todo_id: int, repo: Repository = Depends(get_repository)) -> MessageOut:
    repo.delete(todo_id)
    return MessageOut(message="Todo deleted")


# PUBLIC_INTERFACE
@router.patch(
    "/{todo_id}/complete",
    response_model=Optional[TodoOut],
    response_model_exclude_unset=True,
    summary="Complete Todo",
    description="Mark a todo as completed. Returns null when no todo has the given id.",
)
def complete_todo(todo_id: int, repo: Repository = Depends(get_repository)) -> Optional[TodoOut]:
    updated = repo.complete(todo_id)
    return TodoOut(**updated) if updated else None
