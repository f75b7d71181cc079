import os
import re
from threading import RLock
from typing import Any, Dict, List, Optional

import pytest
from botocore.exceptions import ClientError

# Keep tests away from real AWS configuration
os.environ.setdefault("TABLE_NAME", "todos-test")
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

from todo_crud.dataaccess import TodoDynamoDataAccess  # noqa: E402

_CLAUSE_RE = re.compile(r"(SET|REMOVE) (.*?)(?= SET | REMOVE |$)")


class InMemoryDynamoDBClient:
    """
    Stand-in for the low-level boto3 DynamoDB client, holding one table keyed by `id`.

    Scans walk items in sorted key order and, like DynamoDB, report a
    LastEvaluatedKey whenever the Limit is reached.
    """

    def __init__(self, table_name: str) -> None:
        self._lock = RLock()
        self.table_name = table_name
        self.items: Dict[str, Dict[str, Any]] = {}
        self.calls: List[str] = []

    def _check_table(self, operation: str, table_name: str) -> None:
        self.calls.append(operation)
        if table_name != self.table_name:
            raise ClientError(
                {"Error": {"Code": "ResourceNotFoundException", "Message": "Requested resource not found"}},
                operation,
            )

    def put_item(self, TableName: str, Item: Dict[str, Any]) -> Dict[str, Any]:
        self._check_table("PutItem", TableName)
        with self._lock:
            self.items[Item["id"]["S"]] = dict(Item)
        return {}

    def get_item(self, TableName: str, Key: Dict[str, Any]) -> Dict[str, Any]:
        self._check_table("GetItem", TableName)
        with self._lock:
            item = self.items.get(Key["id"]["S"])
            return {} if item is None else {"Item": dict(item)}

    def update_item(
        self,
        TableName: str,
        Key: Dict[str, Any],
        UpdateExpression: str,
        ExpressionAttributeNames: Dict[str, str],
        ExpressionAttributeValues: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        self._check_table("UpdateItem", TableName)
        values = ExpressionAttributeValues or {}
        with self._lock:
            item = dict(self.items.get(Key["id"]["S"]) or Key)
            for action, body in _CLAUSE_RE.findall(UpdateExpression):
                for part in body.split(", "):
                    if action == "SET":
                        name, placeholder = part.split(" = ")
                        item[ExpressionAttributeNames[name]] = values[placeholder]
                    else:
                        item.pop(ExpressionAttributeNames[part], None)
            self.items[Key["id"]["S"]] = item
        return {}

    def delete_item(self, TableName: str, Key: Dict[str, Any]) -> Dict[str, Any]:
        self._check_table("DeleteItem", TableName)
        with self._lock:
            self.items.pop(Key["id"]["S"], None)
        return {}

    def scan(self, TableName: str, Limit: int, ExclusiveStartKey: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self._check_table("Scan", TableName)
        with self._lock:
            keys = sorted(self.items)
            if ExclusiveStartKey is not None:
                start = ExclusiveStartKey["id"]["S"]
                keys = [k for k in keys if k > start]
            page = keys[:Limit]
            response: Dict[str, Any] = {
                "Items": [dict(self.items[k]) for k in page],
                "Count": len(page),
                "ScannedCount": len(page),
            }
            if len(page) == Limit:
                response["LastEvaluatedKey"] = {"id": {"S": page[-1]}}
            return response


@pytest.fixture
def ddb_client() -> InMemoryDynamoDBClient:
    return InMemoryDynamoDBClient("todos-test")


@pytest.fixture
def data_access(ddb_client: InMemoryDynamoDBClient) -> TodoDynamoDataAccess:
    return TodoDynamoDataAccess(ddb_client, "todos-test", page_size=3)


@pytest.fixture
def client(data_access: TodoDynamoDataAccess):
    from fastapi.testclient import TestClient

    from todo_crud.main import app
    from todo_crud.routers.todos import get_data_access

    app.dependency_overrides[get_data_access] = lambda: data_access
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
