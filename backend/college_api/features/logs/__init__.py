"""Server logs feature - bounded in-memory capture of server output for the admin panel."""

from .store import LogStore, LogEntry, MAX_CAPACITY, DEFAULT_QUERY_LIMIT, json_safe
from .capture import (
    LogStoreProcessor,
    LogStoreHandler,
    format_log_args,
    level_for_method,
    level_for_status,
)
from .dependencies import get_log_store, LogStoreDep
from .schemas import LogEntryResponse, LogListResponse, LogClearResponse
from .router import router as logs_router

__all__ = [
    # Store
    "LogStore",
    "LogEntry",
    "MAX_CAPACITY",
    "DEFAULT_QUERY_LIMIT",
    "json_safe",
    # Capture
    "LogStoreProcessor",
    "LogStoreHandler",
    "format_log_args",
    "level_for_method",
    "level_for_status",
    # Dependencies
    "get_log_store",
    "LogStoreDep",
    # Schemas
    "LogEntryResponse",
    "LogListResponse",
    "LogClearResponse",
    # Router
    "logs_router",
]
