# backend/slotbook/repositories/service_repository.py
"""
Service Repository for SlotBook

Data access for the service catalog. Services are immutable once created,
so this repository only inserts and reads.
"""

from __future__ import annotations

from typing import List, Optional, cast

from sqlalchemy.orm import Session

from ..models.service import Service
from .base_repository import BaseRepository


class ServiceRepository(BaseRepository[Service]):
    def __init__(self, db: Session):
        super().__init__(db, Service)

    def get_for_tenant(self, tenant_id: str, service_id: str) -> Optional[Service]:
        """Service by id, only if it belongs to the tenant."""
        query = self._build_query().filter(
            Service.id == service_id,
            Service.tenant_id == tenant_id,
        )
        return self._execute_first(query)

    def list_for_personnel(self, tenant_id: str, personnel_id: str) -> List[Service]:
        query = (
            self._build_query()
            .filter(Service.tenant_id == tenant_id, Service.personnel_id == personnel_id)
            .order_by(Service.created_at, Service.id)
        )
        return cast(List[Service], self._execute_query(query))

    def list_for_tenant(self, tenant_id: str) -> List[Service]:
        query = (
            self._build_query()
            .filter(Service.tenant_id == tenant_id)
            .order_by(Service.created_at, Service.id)
        )
        return cast(List[Service], self._execute_query(query))
