import logging
from typing import Any, Callable

from flask import current_app

from ..src.errors import UnauthorizedError
from ..src.services.data_client import DataClient


def data_client() -> DataClient:
    return current_app.extensions["data_client"]


def call_with_refresh(fn: Callable[[DataClient], Any]) -> Any:
    """Run ``fn`` against the client; on an upstream 401 refresh the token and retry exactly once."""
    client = data_client()
    try:
        return fn(client)
    except UnauthorizedError as exc:
        if not client.environment.authenticated:
            raise
        logging.warning("Upstream returned 401, refreshing token and retrying once")
        client.token_manager.refresh(stale=exc.token)
        return fn(client)
