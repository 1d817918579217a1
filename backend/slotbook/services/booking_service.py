# backend/slotbook/services/booking_service.py
"""
Booking Service for SlotBook

Commits appointments. A requested start is accepted only if it is one of
the instants availability would offer at the moment of the write: the
schedule row is locked, availability is recomputed inside the same
transaction, and the insert is backed by a unique constraint on
(personnel, starting).
"""

from datetime import datetime, timedelta
import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from ..core.config import Settings
from ..core.enums import SlotAnchor
from ..core.exceptions import (
    BookingConflictException,
    InvalidTimeException,
    StorageException,
)
from ..models.appointment import APPOINTMENT_UNIQUE_START_CONSTRAINT, Appointment
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.appointment_repository import AppointmentRepository
from ..repositories.factory import RepositoryFactory
from ..utils import slot_grid
from .availability_service import AvailabilityService
from .base import BaseService
from .catalog_service import CatalogService, ServiceInfo

logger = logging.getLogger(__name__)

GENERIC_CONFLICT_MESSAGE = "This time slot conflicts with an existing appointment"
PERSONNEL_CONFLICT_MESSAGE = "This time slot was just booked by someone else"


class BookingService(BaseService):
    def __init__(
        self,
        db: Session,
        catalog: Optional[CatalogService] = None,
        availability: Optional[AvailabilityService] = None,
        repository: Optional[AppointmentRepository] = None,
        config: Optional[Settings] = None,
    ):
        super().__init__(db, config)
        self.catalog = catalog or CatalogService(db, config=self.settings)
        self.availability = availability or AvailabilityService(
            db, catalog=self.catalog, config=self.settings
        )
        self.repository = repository or RepositoryFactory.create_appointment_repository(db)

    @BaseService.measure_operation("create_appointment")
    def create_appointment(
        self,
        service_id: str,
        customer_id: str,
        desired_start: datetime,
        tenant_id: Optional[str] = None,
    ) -> Appointment:
        """
        Book ``desired_start`` for ``customer_id``.

        Args:
            service_id: Service being booked
            customer_id: Account of the customer
            desired_start: Naive local wall-clock instant taken from the timetable.
                Under the ``end`` slot anchor the stored appointment starts at
                the first grid point of the run that made it available.
            tenant_id: When given, the service must belong to this tenant

        Raises:
            ServiceNotFoundException: service missing (or of another tenant)
            InvalidTimeException: start is not currently offered
            BookingConflictException: a concurrent booking took the slot first
            StorageException: the store failed
        """
        if tenant_id is not None:
            info = self.catalog.get_service_for_tenant(tenant_id, service_id)
        else:
            info = self.catalog.get_service(service_id)
        desired_start = self._as_wall_clock(desired_start)

        try:
            with self.transaction("create_appointment"):
                starts = self.availability.starts_for(info, desired_start.date(), lock=True)
                if desired_start not in starts:
                    raise InvalidTimeException(desired_start)

                starting = self._occupied_start(desired_start, info)
                appointment = self.repository.insert(
                    service_id=info.service_id,
                    personnel_id=info.personnel_id,
                    customer_id=customer_id,
                    starting=starting,
                    ending=starting + info.duration,
                    duration_minutes=int(info.duration.total_seconds() // 60),
                )
        except InvalidTimeException:
            prometheus_metrics.record_booking_outcome("invalid_time")
            raise
        except IntegrityError as exc:
            prometheus_metrics.record_booking_outcome("conflict")
            message, scope = self._resolve_integrity_conflict_message(exc)
            details = self._build_conflict_details(info.personnel_id, desired_start)
            if scope:
                details["conflict_scope"] = scope
            self.logger.info(
                f"Booking conflict for personnel {info.personnel_id} at {desired_start.isoformat()}"
            )
            raise BookingConflictException(message=message, details=details) from exc
        except StorageException as exc:
            if self._is_deadlock_error(exc.__cause__):
                prometheus_metrics.record_booking_outcome("conflict")
                raise BookingConflictException(
                    message=GENERIC_CONFLICT_MESSAGE,
                    details=self._build_conflict_details(info.personnel_id, desired_start),
                ) from exc
            prometheus_metrics.record_booking_outcome("storage_error")
            raise

        prometheus_metrics.record_booking_outcome("created")
        self.log_operation(
            "create_appointment",
            appointment_id=appointment.id,
            service_id=info.service_id,
            personnel_id=info.personnel_id,
            customer_id=customer_id,
            starting=starting.isoformat(),
        )
        return appointment

    def _occupied_start(self, desired_start: datetime, info: ServiceInfo) -> datetime:
        """Start of the free run that made ``desired_start`` bookable."""
        return slot_grid.occupied_start(
            desired_start,
            info.duration,
            SlotAnchor(self.settings.availability_slot_anchor),
            timedelta(minutes=self.settings.slot_minutes),
        )

    @staticmethod
    def _as_wall_clock(value: datetime) -> datetime:
        """Instants are compared as naive local wall-clock values."""
        return value.replace(tzinfo=None) if value.tzinfo is not None else value

    @staticmethod
    def _build_conflict_details(personnel_id: str, starting: datetime) -> Dict[str, Any]:
        return {"personnel_id": personnel_id, "starting": starting.isoformat()}

    def _resolve_integrity_conflict_message(
        self, integrity_error: IntegrityError
    ) -> Tuple[str, Optional[str]]:
        """
        Determine the conflict message and scope from a database IntegrityError.
        """
        constraint_name: str = ""
        orig = getattr(integrity_error, "orig", None)
        diag = getattr(orig, "diag", None)

        if diag is not None:
            constraint_name = getattr(diag, "constraint_name", "") or ""

        if not constraint_name and orig is not None:
            text = str(orig)
            # SQLite reports the columns instead of the constraint name
            if APPOINTMENT_UNIQUE_START_CONSTRAINT in text or (
                "appointments.personnel_id" in text and "appointments.starting" in text
            ):
                constraint_name = APPOINTMENT_UNIQUE_START_CONSTRAINT

        if constraint_name == APPOINTMENT_UNIQUE_START_CONSTRAINT:
            return PERSONNEL_CONFLICT_MESSAGE, "personnel"

        return GENERIC_CONFLICT_MESSAGE, None

    @staticmethod
    def _is_deadlock_error(error: Optional[BaseException]) -> bool:
        """Whether ``error`` or anything it was raised from is a lock-order failure."""
        while error is not None:
            if isinstance(error, OperationalError):
                message = str(error).lower()
                if "deadlock detected" in message or "could not serialize" in message:
                    return True
            error = error.__cause__
        return False
