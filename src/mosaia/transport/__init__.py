"""Internal transport exports for mosaia."""

from __future__ import annotations

from .api_client import DEFAULT_TIMEOUT, APIClient, EventHook
from .query import QueryParams, build_query_params

__all__ = [
    "APIClient",
    "DEFAULT_TIMEOUT",
    "EventHook",
    "QueryParams",
    "build_query_params",
]
