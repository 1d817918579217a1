# backend/slotbook/repositories/__init__.py
"""
Repository Pattern Implementation for SlotBook

This package provides the repository layer for data access,
separating business logic from database queries.

Key Components:
- BaseRepository: Foundation for all repositories with generic CRUD operations
- RepositoryFactory: Factory for creating repository instances
- ScheduleRepository: Weekly schedule windows
- ServiceRepository: Service catalog
- AppointmentRepository: Appointment ledger
- TenantRepository: Tenant membership lookups

Usage:
    from slotbook.repositories import RepositoryFactory

    # In a service:
    repository = RepositoryFactory.create_appointment_repository(db)
    appointments = repository.list_overlapping(personnel_id, day_start, day_end)
"""

from .appointment_repository import AppointmentRepository
from .base_repository import BaseRepository
from .factory import RepositoryFactory
from .schedule_repository import ScheduleRepository
from .service_repository import ServiceRepository
from .tenant_repository import TenantRepository

__all__ = [
    "AppointmentRepository",
    "BaseRepository",
    "RepositoryFactory",
    "ScheduleRepository",
    "ServiceRepository",
    "TenantRepository",
]
