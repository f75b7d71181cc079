import logging

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mangum import Mangum

from .dataaccess import MalformedItemError
from .settings import get_settings
from .routers import todos as todos_router
from .validation import TodoValidationError

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "CRUD operations for Todo items with token-based pagination.",
    },
]

_settings = get_settings()

logging.basicConfig(
    level=_settings.log_level,
    format="%(asctime)s %(levelname)-8s %(name)s - %(message)s",
)
# the Lambda runtime installs its own root handler, so basicConfig alone is a no-op there
logging.getLogger().setLevel(_settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Todo CRUD",
    description="Serverless backend API for managing todos stored in DynamoDB.",
    version="0.1.0",
    openapi_tags=openapi_tags,
)

allow_all = (_settings.cors_allow_origins == ["*"]) or (len(_settings.cors_allow_origins) == 0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else _settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    Response format:
        {
            "error": "ValidationError",
            "detail": [... pydantic/fastapi error details ...],
            "message": "Request validation failed"
        }
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": exc.errors(),
        },
    )


@app.exception_handler(TodoValidationError)
async def todo_validation_exception_handler(request: Request, exc: TodoValidationError) -> JSONResponse:
    """Reject a todo that failed `validate_todo` with 400 and the list of violations."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "ValidationError",
            "message": str(exc),
            "detail": exc.violations,
        },
    )


@app.exception_handler(MalformedItemError)
async def malformed_item_exception_handler(request: Request, exc: MalformedItemError) -> JSONResponse:
    logger.error("Malformed item in table %s: %s", _settings.table_name, exc)
    return JSONResponse(
        status_code=500,
        content={"error": "MalformedItem", "message": "Stored item could not be read"},
    )


@app.exception_handler(ClientError)
async def store_exception_handler(request: Request, exc: ClientError) -> JSONResponse:
    logger.error("DynamoDB request failed: %s", exc, exc_info=exc)
    return JSONResponse(
        status_code=502,
        content={
            "error": "StoreError",
            "message": exc.response.get("Error", {}).get("Code", "Unknown"),
        },
    )


@app.exception_handler(BotoCoreError)
async def transport_exception_handler(request: Request, exc: BotoCoreError) -> JSONResponse:
    logger.error("DynamoDB unreachable: %s", exc, exc_info=exc)
    return JSONResponse(
        status_code=502,
        content={"error": "StoreError", "message": type(exc).__name__},
    )


# PUBLIC_INTERFACE
@app.get("/", summary="Health Check", tags=["health"])
def health_check():
    """
    Health check endpoint.

    Returns:
        A JSON object indicating service health.
    """
    return {"message": "Healthy", "table": _settings.table_name}


app.include_router(todos_router.router)

# Lambda entry point (API Gateway REST or HTTP API events)
handler = Mangum(app, lifespan="off")
