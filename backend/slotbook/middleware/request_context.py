# backend/slotbook/middleware/request_context.py
"""
Request correlation and timing middleware.

Assigns every request an X-Request-ID (taken from the caller when present),
exposes it to log records through the request context, and logs requests
slower than the configured threshold.
"""

from collections.abc import Awaitable, Callable
import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.config import settings
from ..core.request_context import reset_request_id, set_request_id

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        token = set_request_id(request_id)
        start_time = time.time()
        try:
            response = await call_next(request)
        finally:
            reset_request_id(token)

        process_time = (time.time() - start_time) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.2f}ms"

        if process_time > settings.slow_request_ms:
            logger.warning(
                f"Slow request: {request.method} {request.url.path} took {process_time:.2f}ms",
                extra={"request_id": request_id},
            )
        return response
