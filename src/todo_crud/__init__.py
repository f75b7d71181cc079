"""
Todo CRUD backend package.

Serverless handlers (`todo_crud.main.handler`) over a single DynamoDB table.
The storage layer lives in `todo_crud.dataaccess`; import the FastAPI app
from `todo_crud.main` when needed, since doing so reads configuration.
"""

__version__ = "0.1.0"
