# backend/slotbook/schemas/appointment.py
"""Timetable and appointment schemas. All instants are local wall-clock values."""

from datetime import datetime
from typing import List

from pydantic import Field

from ._strict_base import StrictModel, StrictRequestModel


class TimetableResponse(StrictModel):
    times: List[datetime] = Field(default_factory=list)


class AppointmentCreate(StrictRequestModel):
    starting: datetime = Field(..., description="Requested start, one of the timetable instants")


class AppointmentCreatedResponse(StrictModel):
    appointment_id: str
