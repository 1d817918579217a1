"""
Service layer for SlotBook.

Services hold the business rules and own transaction boundaries; they are
constructed per request with a database session.
"""

from .availability_service import AvailabilityService
from .base import BaseService
from .booking_service import BookingService
from .catalog_service import CatalogService, ServiceInfo
from .schedule_service import ScheduleService

__all__ = [
    "AvailabilityService",
    "BaseService",
    "BookingService",
    "CatalogService",
    "ScheduleService",
    "ServiceInfo",
]
