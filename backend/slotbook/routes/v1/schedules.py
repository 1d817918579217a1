# backend/slotbook/routes/v1/schedules.py
"""
Weekly schedule routes - API v1

Endpoints:
    POST /tenants/{tenant_id}/personnel/{personnel_id}/schedule - Set one weekday window (manager)
    GET  /tenants/{tenant_id}/personnel/{personnel_id}/schedule - Read the weekly schedule
"""

import asyncio
import logging

from fastapi import APIRouter, Depends

from ...api.dependencies import (
    get_schedule_service,
    require_tenant_manager,
    require_tenant_personnel,
)
from ...core.exceptions import DomainException
from ...schemas.schedule import ScheduleResponse, ScheduleWindowResponse, ScheduleWindowUpsert
from ...services.schedule_service import ScheduleService
from .errors import handle_domain_exception

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["schedules-v1"])


@router.post(
    "/tenants/{tenant_id}/personnel/{personnel_id}/schedule",
    response_model=ScheduleWindowResponse,
)
async def set_schedule_window(
    tenant_id: str,
    personnel_id: str,
    payload: ScheduleWindowUpsert,
    _manager_id: str = Depends(require_tenant_manager),
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> ScheduleWindowResponse:
    """Create or replace the personnel's window for one weekday."""
    try:
        ScheduleService.validate_weekday(payload.weekday)
        ScheduleService.validate_bounds(payload.starting, payload.ending)
        window = await asyncio.to_thread(
            schedule_service.set_window,
            personnel_id,
            payload.weekday,
            payload.starting,
            payload.ending,
        )
        return ScheduleWindowResponse.model_validate(window)
    except DomainException as e:
        handle_domain_exception(e)


@router.get(
    "/tenants/{tenant_id}/personnel/{personnel_id}/schedule",
    response_model=ScheduleResponse,
)
async def get_schedule(
    tenant_id: str,
    personnel_id: str,
    _personnel: str = Depends(require_tenant_personnel),
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> ScheduleResponse:
    """Weekly windows of a personnel member, Sunday first."""
    try:
        windows = await asyncio.to_thread(schedule_service.list_windows, personnel_id)
        return ScheduleResponse(
            personnel_id=personnel_id,
            windows=[ScheduleWindowResponse.model_validate(w) for w in windows],
        )
    except DomainException as e:
        handle_domain_exception(e)
