# backend/slotbook/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

Every request gets fresh service instances bound to its own session; no
service is shared between requests.
"""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.availability_service import AvailabilityService
from ...services.booking_service import BookingService
from ...services.catalog_service import CatalogService
from ...services.schedule_service import ScheduleService
from .database import get_db

logger = logging.getLogger(__name__)


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    """Get schedule service instance for dependency injection."""
    return ScheduleService(db)


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Get catalog service instance for dependency injection."""
    return CatalogService(db)


def get_availability_service(
    db: Session = Depends(get_db),
    catalog: CatalogService = Depends(get_catalog_service),
) -> AvailabilityService:
    """Get availability service sharing the request's catalog service."""
    return AvailabilityService(db, catalog=catalog)


def get_booking_service(
    db: Session = Depends(get_db),
    catalog: CatalogService = Depends(get_catalog_service),
    availability: AvailabilityService = Depends(get_availability_service),
) -> BookingService:
    """
    Get booking service instance with all dependencies.

    Args:
        db: Database session
        catalog: Catalog service for resolving the booked service
        availability: Availability service used for the in-transaction recheck

    Returns:
        BookingService instance
    """
    return BookingService(db, catalog=catalog, availability=availability)
