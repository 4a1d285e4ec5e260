"""Request logging middleware that records every completed request in the log store."""

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from college_api.features.logs.capture import level_for_status
from college_api.features.logs.store import LogStore


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Append a summary entry to the log store when each request finishes."""

    def __init__(self, app: ASGIApp, store: LogStore):
        """
        Initialize request log middleware.

        Args:
            app: ASGI application
            store: Log store receiving one entry per request
        """
        super().__init__(app)
        self.store = store

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """
        Process the request and record its outcome.

        Unhandled exceptions are recorded as status 500 and re-raised so the
        error handlers still produce the response.
        """
        start_time = time.perf_counter()
        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"

        try:
            response = await call_next(request)
        except Exception:
            self._record(request.method, url, 500, start_time)
            raise

        duration_ms = self._record(
            request.method, url, response.status_code, start_time
        )
        response.headers["X-Response-Time"] = f"{duration_ms}ms"
        return response

    def _record(self, method: str, url: str, status_code: int, start_time: float) -> int:
        duration_ms = int(round((time.perf_counter() - start_time) * 1000))
        self.store.append(
            level_for_status(status_code),
            f"{method} {url} {status_code} - {duration_ms}ms",
            {
                "method": method,
                "url": url,
                "status": status_code,
                "duration": duration_ms,
            },
        )
        return duration_ms
