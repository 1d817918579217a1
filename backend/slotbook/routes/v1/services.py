# backend/slotbook/routes/v1/services.py
"""
Service catalog routes - API v1

Endpoints:
    POST /tenants/{tenant_id}/personnel/{personnel_id}/services - Create a service (manager)
    GET  /tenants/{tenant_id}/personnel/{personnel_id}/services - Services of one personnel member
    GET  /tenants/{tenant_id}/services - Services of a tenant
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, status

from ...api.dependencies import get_catalog_service, require_tenant_manager
from ...core.exceptions import DomainException
from ...schemas.service import (
    ServiceCreate,
    ServiceCreatedResponse,
    ServiceListResponse,
    ServiceResponse,
)
from ...services.catalog_service import CatalogService
from .errors import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["services-v1"])


@router.post(
    "/tenants/{tenant_id}/personnel/{personnel_id}/services",
    response_model=ServiceCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_service(
    tenant_id: str,
    personnel_id: str,
    payload: ServiceCreate,
    _manager_id: str = Depends(require_tenant_manager),
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> ServiceCreatedResponse:
    try:
        service = await asyncio.to_thread(
            catalog_service.create_service,
            tenant_id,
            personnel_id,
            payload.name,
            payload.price,
            payload.duration,
        )
        return ServiceCreatedResponse(service_id=service.id)
    except DomainException as e:
        handle_domain_exception(e)


@router.get(
    "/tenants/{tenant_id}/personnel/{personnel_id}/services",
    response_model=ServiceListResponse,
)
async def list_personnel_services(
    tenant_id: str,
    personnel_id: str,
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> ServiceListResponse:
    try:
        services = await asyncio.to_thread(
            catalog_service.list_services_for_personnel, tenant_id, personnel_id
        )
        return ServiceListResponse(services=[ServiceResponse.model_validate(s) for s in services])
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/tenants/{tenant_id}/services", response_model=ServiceListResponse)
async def list_tenant_services(
    tenant_id: str,
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> ServiceListResponse:
    try:
        services = await asyncio.to_thread(catalog_service.list_services_for_tenant, tenant_id)
        return ServiceListResponse(services=[ServiceResponse.model_validate(s) for s in services])
    except DomainException as e:
        handle_domain_exception(e)
