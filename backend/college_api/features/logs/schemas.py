"""Pydantic schemas for the server logs endpoints."""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class LogEntryResponse(BaseModel):
    """A captured log entry as returned to the admin panel."""

    id: str
    timestamp: str = Field(..., description="Capture time, ISO-8601 UTC")
    level: str
    message: str
    meta: Dict[str, Any] = Field(default_factory=dict)


class LogListResponse(BaseModel):
    """Envelope for a log query."""

    success: bool = True
    count: int
    data: List[LogEntryResponse]


class LogClearResponse(BaseModel):
    """Envelope for a log clear."""

    success: bool = True
    message: str = "Logs cleared"
