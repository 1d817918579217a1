# backend/slotbook/repositories/factory.py
"""
Repository Factory for SlotBook

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

# Avoid circular imports
if TYPE_CHECKING:
    from .appointment_repository import AppointmentRepository
    from .schedule_repository import ScheduleRepository
    from .service_repository import ServiceRepository
    from .tenant_repository import TenantRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations in tests.
    """

    @staticmethod
    def create_schedule_repository(db: Session) -> "ScheduleRepository":
        """Create repository for weekly schedule windows."""
        from .schedule_repository import ScheduleRepository

        return ScheduleRepository(db)

    @staticmethod
    def create_service_repository(db: Session) -> "ServiceRepository":
        """Create repository for the service catalog."""
        from .service_repository import ServiceRepository

        return ServiceRepository(db)

    @staticmethod
    def create_appointment_repository(db: Session) -> "AppointmentRepository":
        """Create repository for the appointment ledger."""
        from .appointment_repository import AppointmentRepository

        return AppointmentRepository(db)

    @staticmethod
    def create_tenant_repository(db: Session) -> "TenantRepository":
        """Create repository for tenant membership lookups."""
        from .tenant_repository import TenantRepository

        return TenantRepository(db)
