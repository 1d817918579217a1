# backend/slotbook/routes/v1/appointments.py
"""
Timetable and booking routes - API v1

Endpoints:
    GET  /tenants/{tenant_id}/services/{service_id}/timetable?date=YYYY-MM-DD - Open start instants
    POST /tenants/{tenant_id}/services/{service_id}/appointments - Book one of them
"""

import asyncio
from datetime import date
import logging

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies import get_availability_service, get_booking_service
from ...auth import get_current_account_id
from ...core.exceptions import DomainException
from ...schemas.appointment import (
    AppointmentCreate,
    AppointmentCreatedResponse,
    TimetableResponse,
)
from ...services.availability_service import AvailabilityService
from ...services.booking_service import BookingService
from .errors import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["appointments-v1"])


@router.get(
    "/tenants/{tenant_id}/services/{service_id}/timetable",
    response_model=TimetableResponse,
)
async def get_timetable(
    tenant_id: str,
    service_id: str,
    on_date: date = Query(..., alias="date", description="Day to list, YYYY-MM-DD"),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> TimetableResponse:
    """Start instants at which the service can currently be booked on ``date``."""
    try:
        times = await asyncio.to_thread(
            availability_service.timetable, tenant_id, service_id, on_date
        )
        return TimetableResponse(times=times)
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "/tenants/{tenant_id}/services/{service_id}/appointments",
    response_model=AppointmentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_appointment(
    tenant_id: str,
    service_id: str,
    payload: AppointmentCreate,
    account_id: str = Depends(get_current_account_id),
    booking_service: BookingService = Depends(get_booking_service),
) -> AppointmentCreatedResponse:
    """
    Book ``starting`` for the caller.

    409 means another booking took the slot first; the timetable can be
    fetched again and a new start chosen.
    """
    try:
        appointment = await asyncio.to_thread(
            booking_service.create_appointment,
            service_id,
            account_id,
            payload.starting,
            tenant_id=tenant_id,
        )
        return AppointmentCreatedResponse(appointment_id=appointment.id)
    except DomainException as e:
        handle_domain_exception(e)
