"""Exception handlers producing the ``{"success": false, "message": ...}`` envelope."""

import traceback
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from .exceptions import ServiceException

logger = structlog.get_logger(__name__)


def _envelope(status_code: int, message: str, **extra: Any) -> JSONResponse:
    body: Dict[str, Any] = {"success": False, "message": message}
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP exceptions, keeping their status and headers."""
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        message = f"Not Found - {request.url.path}"

    response = _envelope(exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as a single 400 message."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return _envelope(status.HTTP_400_BAD_REQUEST, ", ".join(messages) or "Invalid request")


async def service_exception_handler(
    request: Request, exc: ServiceException
) -> JSONResponse:
    """Render service exceptions with their mapped status code."""
    if exc.status_code >= 500:
        logger.error("Service error", error=exc.message, path=request.url.path)
    return _envelope(exc.status_code, exc.message)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Render constraint violations as client errors."""
    logger.warning("Integrity error", error=str(exc.orig), path=request.url.path)
    return _envelope(
        status.HTTP_400_BAD_REQUEST,
        "Duplicate value or referenced resource not found.",
    )


def build_unhandled_exception_handler(debug: bool):
    """Create the catch-all handler; ``debug`` adds the stack trace to the body."""

    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unhandled error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        extra: Dict[str, Any] = {}
        if debug:
            extra["stack"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )
        message = "Database error" if isinstance(exc, SQLAlchemyError) else "Server Error"
        return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, message, **extra)

    return unhandled_exception_handler


def register_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """Install all envelope handlers on ``app``."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ServiceException, service_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, build_unhandled_exception_handler(debug))
