from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class Todo(BaseModel):
    """
    The todo record as the application sees it.

    Fields:
    - id: Partition key, assigned once at creation
    - created_at: Creation time in epoch seconds (`createdAt` on the wire)
    - task: Short task text; required before the record is stored
    - description: Longer text; required before the record is stored
    - completed: Completion flag, False unless set

    No validation happens here; an in-progress record may leave required
    fields unset until `validation.validate_todo` is run.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    created_at: Optional[int] = Field(default=None, alias="createdAt")
    task: Optional[str] = None
    description: Optional[str] = None
    completed: Optional[bool] = False


# PUBLIC_INTERFACE
class PaginatedList(BaseModel):
    """One page of a table scan."""

    model_config = ConfigDict(populate_by_name=True)

    items: List[Todo] = Field(default_factory=list)
    count: int = 0
    next_token: Optional[str] = Field(default=None, alias="nextToken")
