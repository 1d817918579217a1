# backend/slotbook/middleware/prometheus_middleware.py
"""Collects per-request Prometheus metrics, labelled by route template."""

from collections.abc import Awaitable, Callable
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.ulid_helper import is_valid_ulid
from ..monitoring.prometheus_metrics import prometheus_metrics


def _normalize_path(raw_path: str) -> str:
    # /api/v1/tenants/01HF.../services -> /api/v1/tenants/:id/services
    return "/".join(
        ":id" if segment.isdigit() or is_valid_ulid(segment) else segment
        for segment in raw_path.split("/")
    )


def _endpoint_label(request: Request) -> str:
    # Rebuilt from the URL so nested router prefixes stay in the label
    if request.scope.get("route") is None:
        return _normalize_path(request.url.path)
    names = {str(value): name for name, value in request.path_params.items()}
    return "/".join(
        "{" + names[segment] + "}" if segment in names else segment
        for segment in request.url.path.split("/")
    )


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect Prometheus metrics for HTTP requests."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        # The scrape endpoint is not measured
        if request.url.path == "/metrics/prometheus":
            return await call_next(request)

        method = request.method
        in_progress_label = _normalize_path(request.url.path)
        prometheus_metrics.track_http_request_start(method, in_progress_label)
        start_time = time.time()
        try:
            response = await call_next(request)
            prometheus_metrics.record_http_request(
                method=method,
                endpoint=_endpoint_label(request),
                duration=time.time() - start_time,
                status_code=response.status_code,
            )
            return response
        finally:
            prometheus_metrics.track_http_request_end(method, in_progress_label)
