# backend/slotbook/main.py
"""
SlotBook API application.

Run locally with:
    uvicorn slotbook.main:app --reload --app-dir backend
"""

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.constants import ALLOWED_ORIGINS, API_DESCRIPTION, API_TITLE, API_VERSION
from .core.request_context import attach_request_id_filter
from .middleware.prometheus_middleware import PrometheusMiddleware
from .middleware.request_context import RequestContextMiddleware
from .routes import prometheus
from .routes.v1 import (
    appointments as appointments_v1,
    health as health_v1,
    schedules as schedules_v1,
    services as services_v1,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s"

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format=LOG_FORMAT,
)
attach_request_id_filter()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info(
        f"Starting {API_TITLE} {API_VERSION} "
        f"(environment={settings.environment}, slot_anchor={settings.availability_slot_anchor.value})"
    )
    if settings.environment == "production" and settings.is_sqlite:
        logger.warning("Running production with a SQLite database")
    yield
    logger.info(f"Shutting down {API_TITLE}")


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware and versioned routers."""
    application = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        lifespan=app_lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    application.add_middleware(PrometheusMiddleware)
    application.add_middleware(RequestContextMiddleware)

    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(health_v1.router, prefix="/health")
    api_v1.include_router(schedules_v1.router)
    api_v1.include_router(services_v1.router)
    api_v1.include_router(appointments_v1.router)

    application.include_router(api_v1)
    application.include_router(prometheus.router)
    return application


app = create_app()
