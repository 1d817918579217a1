# backend/slotbook/routes/v1/health.py
"""
Health check endpoints for monitoring and load balancer checks.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Response

from ...core.config import settings
from ...core.constants import API_VERSION
from ...database import get_db_pool_status
from ...schemas.health import HealthLiteResponse, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("", response_model=HealthResponse)
def health_check(response: Response) -> HealthResponse:
    """
    Health check endpoint.

    Returns basic health status including service info, environment and
    connection pool usage.
    """
    response.headers["Cache-Control"] = "no-store"
    return HealthResponse(
        status="healthy",
        service="slotbook-api",
        version=API_VERSION,
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        database_pool=get_db_pool_status(),
    )


@router.get("/lite", response_model=HealthLiteResponse)
def health_check_lite() -> HealthLiteResponse:
    """Lightweight health check that doesn't touch the database."""
    return HealthLiteResponse(status="ok")
