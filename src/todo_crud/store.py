from __future__ import annotations

import logging
from typing import Any

import boto3

from .settings import LocalStore, StoreConfig

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def create_dynamodb_client(store: StoreConfig) -> Any:
    """
    Build the low-level DynamoDB client described by `store`.

    Credentials come from boto3's default provider chain. Call once at
    startup and reuse the client for every request.
    """
    if isinstance(store, LocalStore):
        logger.info("Using DynamoDB Local at %s", store.endpoint_url)
        return boto3.client("dynamodb", endpoint_url=store.endpoint_url, region_name=store.region)

    logger.info("Using DynamoDB in %s (tracing %s)", store.region, "on" if store.tracing_enabled else "off")
    return boto3.client("dynamodb", region_name=store.region)
