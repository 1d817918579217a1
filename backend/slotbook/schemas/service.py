# backend/slotbook/schemas/service.py
"""
Service catalog schemas.

Durations arrive as ISO-8601 durations (``PT1H30M``) or seconds and are
returned as whole minutes. Price range and rounding are enforced by the
catalog service.
"""

from datetime import timedelta
from decimal import Decimal
from typing import List

from pydantic import Field, field_validator

from ..core.constants import MAX_SERVICE_NAME_LENGTH
from ._strict_base import StrictModel, StrictORMModel, StrictRequestModel


class ServiceCreate(StrictRequestModel):
    name: str = Field(..., min_length=1, max_length=MAX_SERVICE_NAME_LENGTH)
    price: Decimal = Field(..., description="Price, rounded half-up to cents")
    duration: timedelta = Field(
        ..., description="Length of one appointment, a multiple of 30 minutes"
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("name must not be blank")
        return cleaned


class ServiceCreatedResponse(StrictModel):
    service_id: str


class ServiceResponse(StrictORMModel):
    id: str
    tenant_id: str
    personnel_id: str
    name: str
    price: Decimal
    duration_minutes: int


class ServiceListResponse(StrictModel):
    services: List[ServiceResponse]
