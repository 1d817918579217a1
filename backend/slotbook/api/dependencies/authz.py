# backend/slotbook/api/dependencies/authz.py
"""
Authorization helpers for tenant-scoped routes.

Schedules and services of a tenant's personnel may only be written by a
manager of that tenant, and only for accounts that are members of it.
"""

from __future__ import annotations

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from ...auth import get_current_account_id
from ...core.exceptions import ForbiddenException, PersonnelNotFoundException
from ...repositories.factory import RepositoryFactory
from .database import get_db

logger = logging.getLogger(__name__)


def require_tenant_personnel(
    tenant_id: str,
    personnel_id: str,
    db: Session = Depends(get_db),
) -> str:
    """
    Ensure ``personnel_id`` is a member of ``tenant_id``.

    Raises:
        HTTPException: 404 PERSONNEL_NOT_FOUND
    """
    if not RepositoryFactory.create_tenant_repository(db).is_member(tenant_id, personnel_id):
        raise PersonnelNotFoundException(tenant_id, personnel_id).to_http_exception()
    return personnel_id


def require_tenant_manager(
    tenant_id: str,
    personnel_id: str,
    account_id: str = Depends(get_current_account_id),
    db: Session = Depends(get_db),
) -> str:
    """
    Ensure the caller manages ``tenant_id`` and the target is its personnel.

    Returns:
        The caller's account id

    Raises:
        HTTPException: 401 without a valid token, 403 for non-managers,
            404 when the personnel is not a member of the tenant
    """
    tenants = RepositoryFactory.create_tenant_repository(db)
    if not tenants.is_manager(tenant_id, account_id):
        logger.info(f"Account {account_id} denied manager access to tenant {tenant_id}")
        raise ForbiddenException(
            "Only tenant managers may perform this action",
            code="NOT_TENANT_MANAGER",
            details={"tenant_id": tenant_id},
        ).to_http_exception()
    if not tenants.is_member(tenant_id, personnel_id):
        raise PersonnelNotFoundException(tenant_id, personnel_id).to_http_exception()
    return account_id
