from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Union

DEFAULT_PAGE_SIZE = 10
DEFAULT_LOCAL_ENDPOINT = "http://dynamodb-local:8000"
DEFAULT_REGION = "us-east-1"
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class LocalStore:
    """DynamoDB Local (e.g. under `sam local`), reached through an endpoint override."""

    endpoint_url: str
    region: str


@dataclass(frozen=True)
class RemoteStore:
    """Managed DynamoDB in an AWS region."""

    region: str
    tracing_enabled: bool


StoreConfig = Union[LocalStore, RemoteStore]


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - TABLE_NAME: DynamoDB table holding the todos (default 'todos')
    - PAGE_SIZE: items per list page; 10 when unset or not a positive integer
    - AWS_SAM_LOCAL: when non-empty, talk to DynamoDB Local instead of AWS
    - DYNAMODB_ENDPOINT: DynamoDB Local endpoint (default 'http://dynamodb-local:8000')
    - AWS_REGION: region for the client (default 'us-east-1')
    - TRACING_ENABLED: 'false' to mark tracing off for the remote client (default: true);
      informational only, instrumentation is left to the Lambda platform
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: root log level (default 'INFO'; unknown names fall back to 'INFO')
    """

    table_name: str
    page_size: int
    store: StoreConfig
    cors_allow_origins: List[str]
    log_level: str


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def parse_page_size(value: Optional[str]) -> int:
    """Return the page size encoded in `value`, or the default when it is not a positive integer."""
    if value is None or not value.strip():
        return DEFAULT_PAGE_SIZE
    try:
        size = int(value)
    except ValueError:
        return DEFAULT_PAGE_SIZE
    return size if size > 0 else DEFAULT_PAGE_SIZE


def _parse_log_level(value: str) -> str:
    level = value.strip().upper()
    return level if level in _LOG_LEVELS else "INFO"


def _store_from_env() -> StoreConfig:
    region = _get_env("AWS_REGION", DEFAULT_REGION).strip()
    if os.getenv("AWS_SAM_LOCAL", "").strip():
        return LocalStore(
            endpoint_url=_get_env("DYNAMODB_ENDPOINT", DEFAULT_LOCAL_ENDPOINT).strip(),
            region=region,
        )
    return RemoteStore(
        region=region,
        tracing_enabled=_parse_bool(_get_env("TRACING_ENABLED", "true"), True),
    )


# PUBLIC_INTERFACE
def load_settings() -> Settings:
    """Read settings from the current environment, bypassing the process-wide cache."""
    return Settings(
        table_name=_get_env("TABLE_NAME", "todos").strip(),
        page_size=parse_page_size(os.getenv("PAGE_SIZE")),
        store=_store_from_env(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=_parse_log_level(_get_env("LOG_LEVEL", "INFO")),
    )


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return application settings, read once per process."""
    return load_settings()
