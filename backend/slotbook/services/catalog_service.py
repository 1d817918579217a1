# backend/slotbook/services/catalog_service.py
"""
Catalog Service for SlotBook

Creates and looks up the services a tenant sells. A service is performed
by one personnel member, has a price rounded to cents and a duration that
fits the slot grid. Services never change after creation.
"""

from dataclasses import dataclass
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import logging
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from ..core.config import Settings
from ..core.constants import MIN_SERVICE_PRICE, PRICE_QUANTUM
from ..core.exceptions import (
    InvalidDurationException,
    InvalidPriceException,
    ServiceNotFoundException,
)
from ..models.service import Service
from ..repositories.factory import RepositoryFactory
from ..repositories.service_repository import ServiceRepository
from .base import BaseService

logger = logging.getLogger(__name__)

PriceInput = Union[Decimal, int, float, str]


@dataclass(frozen=True)
class ServiceInfo:
    """What availability and booking need to know about a service."""

    service_id: str
    tenant_id: str
    personnel_id: str
    duration: timedelta
    price: Decimal

    @classmethod
    def from_model(cls, service: Service) -> "ServiceInfo":
        return cls(
            service_id=service.id,
            tenant_id=service.tenant_id,
            personnel_id=service.personnel_id,
            duration=service.duration,
            price=Decimal(service.price),
        )


class CatalogService(BaseService):
    def __init__(
        self,
        db: Session,
        repository: Optional[ServiceRepository] = None,
        config: Optional[Settings] = None,
    ):
        super().__init__(db, config)
        self.repository = repository or RepositoryFactory.create_service_repository(db)

    def normalize_price(self, price: PriceInput) -> Decimal:
        """
        Check the price range and round half-up to cents.

        Floats go through ``str`` first so ``4.205`` rounds to ``4.21``.
        """
        if isinstance(price, bool):
            raise InvalidPriceException(price, self.settings.max_service_price)
        try:
            value = price if isinstance(price, Decimal) else Decimal(str(price))
        except (InvalidOperation, ValueError) as e:
            raise InvalidPriceException(price, self.settings.max_service_price) from e

        if not value.is_finite() or not (
            MIN_SERVICE_PRICE <= value <= self.settings.max_service_price
        ):
            raise InvalidPriceException(price, self.settings.max_service_price)
        return value.quantize(Decimal(PRICE_QUANTUM), rounding=ROUND_HALF_UP)

    def validate_duration(self, duration: timedelta) -> int:
        """Return the duration in minutes, or raise if it does not fit the grid."""
        slot = timedelta(minutes=self.settings.slot_minutes)
        if (
            duration <= timedelta(0)
            or duration % timedelta(minutes=1)
            or duration % slot
        ):
            raise InvalidDurationException(duration.total_seconds(), self.settings.slot_minutes)
        return duration // timedelta(minutes=1)

    @BaseService.measure_operation("create_service")
    def create_service(
        self,
        tenant_id: str,
        personnel_id: str,
        name: str,
        price: PriceInput,
        duration: timedelta,
    ) -> Service:
        """
        Create a service performed by ``personnel_id`` for ``tenant_id``.

        Raises:
            InvalidPriceException: price outside [0, max_service_price]
            InvalidDurationException: duration not a positive multiple of the slot
            StorageException: the store failed
        """
        rounded = self.normalize_price(price)
        minutes = self.validate_duration(duration)

        with self.transaction("create_service"):
            service = self.repository.create(
                tenant_id=tenant_id,
                personnel_id=personnel_id,
                name=name,
                price=rounded,
                duration_minutes=minutes,
            )

        self.log_operation(
            "create_service",
            service_id=service.id,
            tenant_id=tenant_id,
            personnel_id=personnel_id,
            duration_minutes=minutes,
        )
        return service

    @BaseService.measure_operation("get_service")
    def get_service(self, service_id: str) -> ServiceInfo:
        """
        Resolve a service to its personnel, duration and price.

        Raises:
            ServiceNotFoundException: no service with this id
        """
        with self.storage_errors("get_service"):
            service = self.repository.get_by_id(service_id)
        if service is None:
            raise ServiceNotFoundException(service_id)
        return ServiceInfo.from_model(service)

    @BaseService.measure_operation("get_service_for_tenant")
    def get_service_for_tenant(self, tenant_id: str, service_id: str) -> ServiceInfo:
        """Like :meth:`get_service`, but a service of another tenant is not found."""
        with self.storage_errors("get_service_for_tenant"):
            service = self.repository.get_for_tenant(tenant_id, service_id)
        if service is None:
            raise ServiceNotFoundException(service_id)
        return ServiceInfo.from_model(service)

    @BaseService.measure_operation("list_services_for_personnel")
    def list_services_for_personnel(self, tenant_id: str, personnel_id: str) -> List[Service]:
        with self.storage_errors("list_services_for_personnel"):
            return self.repository.list_for_personnel(tenant_id, personnel_id)

    @BaseService.measure_operation("list_services_for_tenant")
    def list_services_for_tenant(self, tenant_id: str) -> List[Service]:
        with self.storage_errors("list_services_for_tenant"):
            return self.repository.list_for_tenant(tenant_id)
