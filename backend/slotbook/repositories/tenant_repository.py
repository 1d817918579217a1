# backend/slotbook/repositories/tenant_repository.py
"""Read-only access to tenant membership, used for authorization checks."""

from __future__ import annotations

from sqlalchemy.orm import Session

from ..models.tenant import TenantMember
from .base_repository import BaseRepository


class TenantRepository(BaseRepository[TenantMember]):
    def __init__(self, db: Session):
        super().__init__(db, TenantMember)

    def is_member(self, tenant_id: str, account_id: str) -> bool:
        return self.exists(tenant_id=tenant_id, account_id=account_id)

    def is_manager(self, tenant_id: str, account_id: str) -> bool:
        return self.exists(tenant_id=tenant_id, account_id=account_id, is_manager=True)
