# backend/slotbook/api/dependencies/__init__.py
"""
Central export point for all dependencies.

This module re-exports all dependencies from submodules
for convenient access throughout the application.
"""

from .authz import require_tenant_manager, require_tenant_personnel
from .database import get_db
from .services import (
    get_availability_service,
    get_booking_service,
    get_catalog_service,
    get_schedule_service,
)

__all__ = [
    # Authz
    "require_tenant_manager",
    "require_tenant_personnel",
    # Database
    "get_db",
    # Services
    "get_availability_service",
    "get_booking_service",
    "get_catalog_service",
    "get_schedule_service",
]
