"""Data-access layer: CLI adapter, typed records, fetch cache, and actions."""

from __future__ import annotations

from .actions import Actions
from .adapter import CliDataSource, FetchRequest
from .cache import BatchRequest, BatchResult, CacheStats, FetchCache, FetchResult
from .errors import ActionError, DashboardError, DecodeError, RemoteExecutionError, UnsupportedItemKindError

__all__ = [
    "Actions",
    "ActionError",
    "BatchRequest",
    "BatchResult",
    "CacheStats",
    "CliDataSource",
    "DashboardError",
    "DecodeError",
    "FetchCache",
    "FetchRequest",
    "FetchResult",
    "RemoteExecutionError",
    "UnsupportedItemKindError",
]
