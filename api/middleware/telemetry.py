"""
Telemetry Middleware
====================

Request/response telemetry and correlation ID handling.
"""

import time
import uuid
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from observability.logging_config import bind_context, clear_context

logger = structlog.get_logger(__name__)


class TelemetryMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request telemetry and correlation ID propagation.

    Adds:
    - X-Request-ID header to all responses
    - Request timing
    - Logging context
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request with telemetry."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id

        clear_context()
        bind_context(request_id=request_id, path=request.url.path)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"

        logger.debug(
            "Request handled",
            method=request.method,
            status=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        return response
