"""Server logs API endpoints (admin only)."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from college_api.features.auth.dependencies import get_current_admin_user
from .dependencies import LogStoreDep
from .schemas import LogClearResponse, LogEntryResponse, LogListResponse
from .store import DEFAULT_QUERY_LIMIT

router = APIRouter(
    prefix="/logs",
    tags=["logs"],
    dependencies=[Depends(get_current_admin_user)],
)


def _parse_limit(raw: Optional[str]) -> int:
    """Parse the ``limit`` query parameter, falling back to the default."""
    if raw is None or not raw.strip():
        return DEFAULT_QUERY_LIMIT
    try:
        return int(raw.strip())
    except ValueError:
        return DEFAULT_QUERY_LIMIT


@router.get("", response_model=LogListResponse)
async def get_logs(
    log_store: LogStoreDep,
    level: Optional[str] = Query(
        None, description="Only entries with this level (info, warn, error, debug)"
    ),
    limit: Optional[str] = Query(
        None, description=f"Maximum entries to return (default {DEFAULT_QUERY_LIMIT})"
    ),
    since: Optional[str] = Query(
        None, description="Only entries captured after this ISO-8601 instant"
    ),
) -> LogListResponse:
    """
    Get captured server logs, newest first.

    Malformed filters never fail the request: a non-numeric ``limit`` uses
    the default and an unparseable ``since`` is ignored.
    """
    entries = log_store.query(level=level or None, limit=_parse_limit(limit), since=since)
    return LogListResponse(
        success=True,
        count=len(entries),
        data=[LogEntryResponse(**entry.to_dict()) for entry in entries],
    )


@router.delete("", response_model=LogClearResponse)
async def clear_logs(log_store: LogStoreDep) -> LogClearResponse:
    """Clear all captured server logs."""
    log_store.clear()
    return LogClearResponse(success=True, message="Logs cleared")
