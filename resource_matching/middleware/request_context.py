"""
Request Context Middleware

Binds a correlation id and the caller's tenant to structlog's context
variables for the lifetime of a request, and echoes the id back in the
``X-Request-ID`` response header.
"""

import time
import uuid
from typing import Optional

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"
TENANT_ID_HEADER = "X-Tenant-ID"

logger = structlog.get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Correlates every log line of a request with one request id."""

    def __init__(self, app, excluded_paths: Optional[list] = None):
        super().__init__(app)
        self.excluded_paths = excluded_paths or ["/health", "/docs", "/openapi.json"]

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            tenant_id=request.headers.get(TENANT_ID_HEADER),
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            if not self._should_exclude_path(request.url.path):
                logger.info(
                    "Request handled",
                    method=request.method,
                    path=request.url.path,
                    duration_ms=duration_ms,
                )
            structlog.contextvars.clear_contextvars()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    def _should_exclude_path(self, path: str) -> bool:
        return any(path.startswith(excluded) for excluded in self.excluded_paths)


def get_request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None) or request.headers.get(REQUEST_ID_HEADER)


__all__ = ["RequestContextMiddleware", "get_request_id", "REQUEST_ID_HEADER"]
