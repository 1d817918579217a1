# backend/slotbook/services/availability_service.py
"""
Availability Service for SlotBook

Turns a personnel member's weekly schedule and existing appointments into
the bookable start instants of one service on one date.

The computation is a pure function of store state: nothing is cached
between calls, so two calls against the same state agree.
"""

from datetime import date, datetime, timedelta
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.config import Settings
from ..core.enums import SlotAnchor, Weekday
from ..models.schedule import WeeklyScheduleWindow
from ..repositories.appointment_repository import AppointmentRepository
from ..repositories.factory import RepositoryFactory
from ..repositories.schedule_repository import ScheduleRepository
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..utils import slot_grid
from .base import BaseService
from .catalog_service import CatalogService, ServiceInfo

logger = logging.getLogger(__name__)


class AvailabilityService(BaseService):
    def __init__(
        self,
        db: Session,
        catalog: Optional[CatalogService] = None,
        schedule_repository: Optional[ScheduleRepository] = None,
        appointment_repository: Optional[AppointmentRepository] = None,
        config: Optional[Settings] = None,
    ):
        super().__init__(db, config)
        self.catalog = catalog or CatalogService(db, config=self.settings)
        self.schedule_repository = (
            schedule_repository or RepositoryFactory.create_schedule_repository(db)
        )
        self.appointment_repository = (
            appointment_repository or RepositoryFactory.create_appointment_repository(db)
        )

    @property
    def anchor(self) -> SlotAnchor:
        return SlotAnchor(self.settings.availability_slot_anchor)

    @property
    def step(self) -> timedelta:
        return timedelta(minutes=self.settings.slot_minutes)

    @BaseService.measure_operation("compute_available_starts")
    def compute_available_starts(self, service_id: str, on_date: date) -> List[datetime]:
        """
        Ordered, duplicate-free start instants for ``service_id`` on ``on_date``.

        A personnel member without a window on that weekday has no starts.

        Raises:
            ServiceNotFoundException: no service with this id
            StorageException: the store failed
        """
        info = self.catalog.get_service(service_id)
        with self.storage_errors("compute_available_starts"):
            starts = self.starts_for(info, on_date)
        prometheus_metrics.observe_available_starts(len(starts))
        return starts

    def timetable(self, tenant_id: str, service_id: str, on_date: date) -> List[datetime]:
        """Available starts for a service that must belong to ``tenant_id``."""
        self.catalog.get_service_for_tenant(tenant_id, service_id)
        return self.compute_available_starts(service_id, on_date)

    def starts_for(
        self,
        info: ServiceInfo,
        on_date: date,
        *,
        window: Optional[WeeklyScheduleWindow] = None,
        lock: bool = False,
    ) -> List[datetime]:
        """
        Compute starts for an already resolved service.

        The booking path passes ``lock=True`` so the schedule row stays locked
        for the rest of its transaction.
        """
        if window is None:
            window = self.schedule_repository.get_window(
                info.personnel_id, Weekday.from_date(on_date), for_update=lock
            )
        if window is None:
            self.logger.debug(
                f"No schedule for personnel {info.personnel_id} on {on_date.isoformat()}"
            )
            return []

        points = slot_grid.grid_points(on_date, window.starting, window.ending, self.step)
        if not points:
            return []

        busy = [
            (appointment.starting, appointment.ending)
            for appointment in self.appointment_repository.list_overlapping(
                info.personnel_id, points[0], points[-1] + self.step
            )
        ]
        return slot_grid.available_starts(
            on_date,
            window.starting,
            window.ending,
            busy,
            info.duration,
            self.anchor,
            self.step,
        )
