"""Pydantic request and response models for the SlotBook API."""

from .appointment import AppointmentCreate, AppointmentCreatedResponse, TimetableResponse
from .schedule import ScheduleResponse, ScheduleWindowResponse, ScheduleWindowUpsert
from .service import (
    ServiceCreate,
    ServiceCreatedResponse,
    ServiceListResponse,
    ServiceResponse,
)

__all__ = [
    "AppointmentCreate",
    "AppointmentCreatedResponse",
    "ScheduleResponse",
    "ScheduleWindowResponse",
    "ScheduleWindowUpsert",
    "ServiceCreate",
    "ServiceCreatedResponse",
    "ServiceListResponse",
    "ServiceResponse",
    "TimetableResponse",
]
