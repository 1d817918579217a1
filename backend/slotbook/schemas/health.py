"""Health check response models."""

from typing import Dict

from ._strict_base import StrictModel


class HealthResponse(StrictModel):
    status: str
    service: str
    version: str
    environment: str
    timestamp: str
    database_pool: Dict[str, int]


class HealthLiteResponse(StrictModel):
    status: str
