"""Dependency injection for the logs feature."""

from typing import Annotated

from fastapi import Depends, Request

from .store import LogStore


def get_log_store(request: Request) -> LogStore:
    """Return the log store owned by the running application."""
    return request.app.state.log_store


# Type alias for dependency injection
LogStoreDep = Annotated[LogStore, Depends(get_log_store)]
