from __future__ import annotations

import time
import uuid
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..dataaccess import DataAccess, TodoDynamoDataAccess
from ..models import Todo
from ..schemas import TodoIn, TodoPage
from ..settings import get_settings
from ..store import create_dynamodb_client
from ..utils import pagination_envelope
from ..validation import validate_todo

router = APIRouter(
    prefix="/api/v1/todos",
    tags=["todos"],
)


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_data_access() -> DataAccess:
    """
    Return the process-wide data access object, building the DynamoDB client
    on first use.
    """
    settings = get_settings()
    client = create_dynamodb_client(settings.store)
    return TodoDynamoDataAccess(client, settings.table_name, settings.page_size)


def _get_data_access(data_access: DataAccess = Depends(get_data_access)) -> DataAccess:
    """
    Dependency wrapper for data access to keep signatures clean.
    """
    return data_access


def _load(data_access: DataAccess, todo_id: str) -> Todo:
    todo = data_access.get(todo_id)
    if todo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")
    return todo


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=Todo,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"description": "Validation error"},
    },
)
def create_todo(payload: TodoIn, data_access: DataAccess = Depends(_get_data_access)) -> Todo:
    """
    Create a new Todo with a fresh id and creation time.
    """
    todo = Todo(
        id=str(uuid.uuid4()),
        created_at=int(time.time()),
        task=payload.task,
        description=payload.description,
        completed=payload.completed if payload.completed is not None else False,
    )
    validate_todo(todo)
    data_access.create(todo)
    return todo


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=TodoPage,
    summary="List Todos",
    description=(
        "List todos one page at a time, in table scan order.\n\n"
        "Query parameters:\n"
        "- nextToken: token returned by the previous page; omit for the first page\n\n"
        "Returns the page items, their count and the token for the following page."
    ),
    responses={
        200: {"description": "List retrieved successfully"},
    },
)
def list_todos(
    next_token: Optional[str] = Query(None, alias="nextToken", description="Continuation token"),
    data_access: DataAccess = Depends(_get_data_access),
) -> TodoPage:
    """
    List one page of todos.
    """
    page = data_access.list(next_token)
    return TodoPage(**pagination_envelope(page))


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=Todo,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        200: {"description": "Todo found"},
        404: {"description": "Todo not found"},
    },
)
def get_todo(todo_id: str, data_access: DataAccess = Depends(_get_data_access)) -> Todo:
    """
    Retrieve a single Todo item by its ID.
    """
    return _load(data_access, todo_id)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=Todo,
    summary="Replace Todo",
    description=(
        "Replace the task, description and completed flag of an existing Todo item. "
        "The id and creation time are kept; an omitted completed flag becomes false."
    ),
    responses={
        200: {"description": "Todo updated"},
        400: {"description": "Validation error"},
        404: {"description": "Todo not found"},
    },
)
def put_todo(todo_id: str, payload: TodoIn, data_access: DataAccess = Depends(_get_data_access)) -> Todo:
    """
    Full update (replace) of the mutable fields of a Todo.
    """
    existing = _load(data_access, todo_id)
    updated = existing.model_copy(
        update={
            "task": payload.task,
            "description": payload.description,
            "completed": payload.completed if payload.completed is not None else False,
        }
    )
    validate_todo(updated)
    data_access.update(updated)
    return updated


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Delete a Todo item by ID. Deleting an unknown ID also succeeds.",
    responses={
        204: {"description": "Todo deleted"},
    },
)
def delete_todo(todo_id: str, data_access: DataAccess = Depends(_get_data_access)) -> None:
    """
    Delete a Todo. Returns 204 whether or not it existed.
    """
    data_access.delete(todo_id)
    return None
