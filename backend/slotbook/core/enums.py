# backend/slotbook/core/enums.py
"""
Core enums for the SlotBook platform.

Weekdays are numbered the way schedules are stored: Sunday is 0 and
Saturday is 6. Python's ``date.weekday()`` numbers Monday as 0, so always go
through :meth:`Weekday.from_date` when resolving the weekday of a date.
"""

from datetime import date
from enum import Enum, IntEnum


class Weekday(IntEnum):
    """Day of the week as stored on weekly schedule windows."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def from_date(cls, value: date) -> "Weekday":
        # isoweekday(): Monday=1 .. Sunday=7
        return cls(value.isoweekday() % 7)

    @classmethod
    def is_valid(cls, value: object) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, cls):
            return True
        return isinstance(value, int) and cls.SUNDAY <= value <= cls.SATURDAY


class SlotAnchor(str, Enum):
    """
    Which grid point of a satisfying run is reported as the start instant.

    START reports the first grid point of the run (the instant the customer
    actually books). END reports the grid point at which the run first became
    long enough, trailing the feasible start by ``k - 1`` grid steps.
    """

    START = "start"
    END = "end"
