from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from .models import PaginatedList, Todo

logger = logging.getLogger(__name__)

AttributeMap = Dict[str, Dict[str, Any]]

_INTEGER_RE = re.compile(r"[+-]?\d+")
# createdAt must fit a signed 64-bit integer
_MIN_CREATED_AT = -(2**63)
_MAX_CREATED_AT = 2**63 - 1

# (attribute name, Todo field, DynamoDB type tag) for every non-key attribute
_ATTRIBUTES: Tuple[Tuple[str, str, str], ...] = (
    ("createdAt", "created_at", "N"),
    ("task", "task", "S"),
    ("description", "description", "S"),
    ("completed", "completed", "BOOL"),
)


class MalformedItemError(ValueError):
    """Raised when a stored item cannot be decoded into a Todo."""


# PUBLIC_INTERFACE
class DataAccess(ABC):
    """Abstract data access contract for todo storage backends."""

    @abstractmethod
    def create(self, todo: Todo) -> None:
        """Store `todo`, replacing any item with the same id."""

    @abstractmethod
    def get(self, todo_id: str) -> Optional[Todo]:
        """Return the todo with `todo_id`, or None if not found."""

    @abstractmethod
    def update(self, todo: Todo) -> None:
        """Rewrite the item with `todo.id` from the todo's current values, creating it if absent."""

    @abstractmethod
    def delete(self, todo_id: str) -> None:
        """Delete the todo with `todo_id`. Missing ids are ignored."""

    @abstractmethod
    def list(self, next_token: Optional[str] = None) -> PaginatedList:
        """
        Return one page of todos.
        - Starts from the beginning of the table when `next_token` is empty
        - Otherwise resumes strictly after the item whose id is `next_token`
        """


def _encode(tag: str, value: Any) -> Dict[str, Any]:
    if tag == "N":
        return {"N": str(value)}
    return {tag: value}


# PUBLIC_INTERFACE
def to_item(todo: Todo) -> AttributeMap:
    """Encode `todo` as a DynamoDB attribute map. Fields set to None are left out."""
    item: AttributeMap = {}
    if todo.id is not None:
        item["id"] = {"S": todo.id}
    for attribute, field, tag in _ATTRIBUTES:
        value = getattr(todo, field)
        if value is not None:
            item[attribute] = _encode(tag, value)
    return item


def _require(item: AttributeMap, attribute: str, tag: Optional[str]) -> Dict[str, Any]:
    value = item.get(attribute)
    if value is None or (tag is not None and value.get(tag) is None):
        raise MalformedItemError(f"Item must have a '{attribute}' attribute")
    return value


# PUBLIC_INTERFACE
def from_item(item: Optional[AttributeMap]) -> Todo:
    """
    Decode a DynamoDB attribute map into a Todo.

    Raises:
        MalformedItemError: if the map is None, if `id`, `task` or
            `description` is missing or not a string, if `createdAt` is
            missing, not a number or not an integer, or if `completed`
            is missing.
    """
    if item is None:
        raise MalformedItemError("Item cannot be null")

    id_attr = _require(item, "id", "S")
    created_at_attr = _require(item, "createdAt", "N")
    task_attr = _require(item, "task", "S")
    description_attr = _require(item, "description", "S")
    # the BOOL tag is trusted when the attribute is there at all
    completed_attr = _require(item, "completed", None)

    raw_created_at = created_at_attr["N"]
    if not _INTEGER_RE.fullmatch(raw_created_at):
        raise MalformedItemError(f"Invalid 'createdAt' value: {raw_created_at}")
    created_at = int(raw_created_at)
    if not _MIN_CREATED_AT <= created_at <= _MAX_CREATED_AT:
        raise MalformedItemError(f"Invalid 'createdAt' value: {raw_created_at}")

    return Todo(
        id=id_attr["S"],
        created_at=created_at,
        task=task_attr["S"],
        description=description_attr["S"],
        completed=completed_attr.get("BOOL"),
    )


class TodoDynamoDataAccess(DataAccess):
    """
    DynamoDB-backed todo storage.

    The boto3 client is built once by the caller (see `store.create_dynamodb_client`)
    and shared for the life of the process. Every operation is one round trip;
    client errors propagate untouched.
    """

    def __init__(self, client: Any, table_name: str, page_size: int) -> None:
        self._client = client
        self._table_name = table_name
        self._page_size = page_size

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def page_size(self) -> int:
        return self._page_size

    @staticmethod
    def _key(todo_id: str) -> AttributeMap:
        return {"id": {"S": todo_id}}

    @staticmethod
    def _require_id(todo: Todo) -> str:
        if todo.id is None:
            raise ValueError("Todo id is required")
        return todo.id

    def create(self, todo: Todo) -> None:
        self._require_id(todo)
        logger.debug("put_item id=%s table=%s", todo.id, self._table_name)
        self._client.put_item(TableName=self._table_name, Item=to_item(todo))

    def get(self, todo_id: str) -> Optional[Todo]:
        logger.debug("get_item id=%s table=%s", todo_id, self._table_name)
        response = self._client.get_item(TableName=self._table_name, Key=self._key(todo_id))
        item = response.get("Item")
        if item is None:
            return None
        return from_item(item)

    def update(self, todo: Todo) -> None:
        todo_id = self._require_id(todo)
        encoded = to_item(todo)

        assignments: List[str] = []
        removals: List[str] = []
        names: Dict[str, str] = {}
        values: AttributeMap = {}
        for attribute, _field, _tag in _ATTRIBUTES:
            names[f"#{attribute}"] = attribute
            if attribute in encoded:
                assignments.append(f"#{attribute} = :{attribute}")
                values[f":{attribute}"] = encoded[attribute]
            else:
                removals.append(f"#{attribute}")

        clauses = []
        if assignments:
            clauses.append("SET " + ", ".join(assignments))
        if removals:
            clauses.append("REMOVE " + ", ".join(removals))

        params: Dict[str, Any] = {
            "TableName": self._table_name,
            "Key": self._key(todo_id),
            "UpdateExpression": " ".join(clauses),
            "ExpressionAttributeNames": names,
        }
        if values:
            params["ExpressionAttributeValues"] = values

        logger.debug("update_item id=%s table=%s", todo_id, self._table_name)
        self._client.update_item(**params)

    def delete(self, todo_id: str) -> None:
        logger.debug("delete_item id=%s table=%s", todo_id, self._table_name)
        self._client.delete_item(TableName=self._table_name, Key=self._key(todo_id))

    def list(self, next_token: Optional[str] = None) -> PaginatedList:
        params: Dict[str, Any] = {"TableName": self._table_name, "Limit": self._page_size}
        if next_token is not None and next_token.strip():
            params["ExclusiveStartKey"] = self._key(next_token)

        logger.debug("scan table=%s limit=%d start=%r", self._table_name, self._page_size, next_token)
        response = self._client.scan(**params)

        new_token: Optional[str] = None
        last_key = response.get("LastEvaluatedKey") or {}
        id_attr = last_key.get("id")
        if id_attr is not None and id_attr.get("S") is not None:
            new_token = id_attr["S"]

        items = [from_item(item) for item in response.get("Items", [])]
        return PaginatedList(items=items, count=response.get("Count", len(items)), next_token=new_token)
