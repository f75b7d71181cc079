from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import Todo


# PUBLIC_INTERFACE
class TodoIn(BaseModel):
    """
    Request body for creating or replacing a Todo item.

    `task` and `description` are optional here so that missing values reach
    `validate_todo` and are reported with its messages.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "task": "Buy groceries",
                "description": "Milk, eggs, bread",
                "completed": False,
            }
        }
    )

    task: Optional[str] = Field(default=None, description="Short task text")
    description: Optional[str] = Field(default=None, description="Detailed description")
    completed: Optional[bool] = Field(default=None, description="Completion status flag; false when omitted")


# PUBLIC_INTERFACE
class TodoPage(BaseModel):
    """
    Envelope for paginated list responses.
    """

    model_config = ConfigDict(populate_by_name=True)

    items: List[Todo] = Field(..., description="Todo items on this page")
    count: int = Field(..., description="Number of items on this page")
    next_token: Optional[str] = Field(
        default=None,
        alias="nextToken",
        description="Pass back as `nextToken` to fetch the next page; absent on the last page",
    )
