"""Main FastAPI application for the College Management API."""

from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
import structlog

from college_api.core.config import Settings, get_global_settings
from college_api.core.errors import register_exception_handlers
from college_api.core.logging import setup_logging
from college_api.core.rate_limiter import limiter
from college_api.features.auth import auth_router
from college_api.features.logs import LogStore, logs_router
from college_api.middleware import RequestLogMiddleware

APP_VERSION = "1.0.0"

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    logger.info(
        "Starting up College Management API",
        environment=settings.environment,
        debug=settings.debug,
    )
    yield
    logger.info("Shutting down College Management API")


# OpenAPI tags metadata
tags_metadata = [
    {
        "name": "auth",
        "description": "Login and current-user endpoints. Issues JWT bearer tokens.",
    },
    {
        "name": "logs",
        "description": "Recent server logs for the admin notification panel (admin only).",
    },
    {
        "name": "health",
        "description": "Health check and system status endpoints.",
    },
]


def create_app(
    settings: Optional[Settings] = None,
    log_store: Optional[LogStore] = None,
) -> FastAPI:
    """Build the application around a single log store.

    :param settings: Settings to use (defaults to the global settings)
    :param log_store: Store receiving captured logs (a new one if omitted)
    :returns: Configured FastAPI application
    """
    settings = settings or get_global_settings()
    log_store = log_store if log_store is not None else LogStore()

    setup_logging(
        log_store,
        log_level=settings.log_level,
        capture_loggers=settings.log_capture_loggers_list,
    )

    app = FastAPI(
        title="College Management System API",
        description="""
        Backend API for the College Management System.

        ## Authentication

        This API uses JWT (JSON Web Token) based authentication.

        1. Login at `/api/auth/login` to receive a JWT token
        2. Include the token in the `Authorization` header: `Bearer <token>`

        Roles: **admin**, **faculty**, **student**.

        ## Server logs

        Console output and every HTTP request are captured in a bounded
        in-memory buffer (newest 200 entries) readable by admins at `/api/logs`.
        """,
        version=APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.log_store = log_store

    # Configure rate limiter for FastAPI app
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]
    register_exception_handlers(app, debug=settings.debug)

    app.add_middleware(RequestLogMiddleware, store=log_store)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(logs_router, prefix="/api")

    @app.get("/", tags=["health"])
    async def root() -> Dict[str, Any]:
        """Welcome document listing the API entry points."""
        return {
            "success": True,
            "message": "Welcome to College Management System API",
            "version": APP_VERSION,
            "documentation": "/docs",
            "endpoints": {
                "auth": "/api/auth",
                "logs": "/api/logs",
                "health": "/api/health",
            },
        }

    @app.get("/api/health", tags=["health"])
    async def health_check() -> Dict[str, Any]:
        """
        Health check endpoint.

        Can be used by monitoring tools and load balancers to check that the
        service is running.
        """
        return {
            "success": True,
            "status": "healthy",
            "message": "College Management System API is running",
            "version": APP_VERSION,
        }

    return app


app = create_app()
