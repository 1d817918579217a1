# backend/slotbook/schemas/schedule.py
"""
Weekly schedule schemas.

Weekdays use Sunday=0 .. Saturday=6. The weekday is passed through as sent
and checked by the schedule service, so anything other than an integer in
range (including ``true``, ``"1"`` or ``1.0``) is reported as INVALID_WEEKDAY
rather than coerced or rejected as a generic validation error.

Times of day are local wall-clock values; a UTC offset sent with a time is
dropped, matching how booking instants are handled.
"""

from datetime import time
from typing import Any, List

from pydantic import Field, field_validator

from ._strict_base import StrictORMModel, StrictRequestModel


def _parse_time(value: object) -> object:
    if isinstance(value, str):
        candidate = value.strip()
        try:
            return time.fromisoformat(candidate)
        except ValueError:
            raise ValueError(f"Invalid time format: {value}. Expected HH:MM[:SS] format.")
    return value


class ScheduleWindowUpsert(StrictRequestModel):
    """Set the recurring window for one weekday of a personnel member."""

    weekday: Any = Field(..., description="0 = Sunday .. 6 = Saturday (integer)")
    starting: time = Field(..., description="Start of the window (local time of day)")
    ending: time = Field(..., description="End of the window (local time of day)")

    @field_validator("starting", "ending", mode="before")
    @classmethod
    def parse_time_string(cls, v: object) -> object:
        return _parse_time(v)

    @field_validator("starting", "ending")
    @classmethod
    def as_wall_clock(cls, v: time) -> time:
        return v.replace(tzinfo=None)


class ScheduleWindowResponse(StrictORMModel):
    personnel_id: str
    weekday: int
    starting: time
    ending: time


class ScheduleResponse(StrictORMModel):
    personnel_id: str
    windows: List[ScheduleWindowResponse]
