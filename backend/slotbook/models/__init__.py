"""
Database models for the SlotBook platform.

- Tenant / TenantMember: membership data read for authorization
- WeeklyScheduleWindow: recurring per-weekday availability
- Service: bookable services with price and duration
- Appointment: committed bookings
"""

from .appointment import Appointment
from .schedule import WeeklyScheduleWindow
from .service import Service
from .tenant import Tenant, TenantMember

__all__ = [
    "Appointment",
    "Service",
    "Tenant",
    "TenantMember",
    "WeeklyScheduleWindow",
]
