# backend/slotbook/services/schedule_service.py
"""
Schedule Service for SlotBook

Owns the weekly schedule: one recurring availability window per
(personnel, weekday). Writing a window for a pair that already has one
replaces it.
"""

from datetime import time
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.config import Settings
from ..core.enums import Weekday
from ..core.exceptions import InvalidScheduleWindowException, InvalidWeekdayException
from ..models.schedule import WeeklyScheduleWindow
from ..repositories.factory import RepositoryFactory
from ..repositories.schedule_repository import ScheduleRepository
from .base import BaseService

logger = logging.getLogger(__name__)


class ScheduleService(BaseService):
    def __init__(
        self,
        db: Session,
        repository: Optional[ScheduleRepository] = None,
        config: Optional[Settings] = None,
    ):
        super().__init__(db, config)
        self.repository = repository or RepositoryFactory.create_schedule_repository(db)

    @staticmethod
    def validate_weekday(weekday: object) -> Weekday:
        if not Weekday.is_valid(weekday):
            raise InvalidWeekdayException(weekday)
        return Weekday(weekday)

    @staticmethod
    def validate_bounds(starting: time, ending: time) -> None:
        """Reject windows that do not start before they end."""
        if starting >= ending:
            raise InvalidScheduleWindowException(starting.isoformat(), ending.isoformat())

    @BaseService.measure_operation("set_window")
    def set_window(
        self, personnel_id: str, weekday: int, starting: time, ending: time
    ) -> WeeklyScheduleWindow:
        """
        Upsert the window for (personnel, weekday).

        Only the weekday is validated here; degenerate windows are stored as
        given and simply produce no bookable starts.

        Raises:
            InvalidWeekdayException: weekday outside 0 (Sunday) .. 6 (Saturday)
            StorageException: the store failed
        """
        day = self.validate_weekday(weekday)

        with self.transaction("set_window"):
            window = self.repository.upsert_window(personnel_id, day, starting, ending)

        self.log_operation(
            "set_window",
            personnel_id=personnel_id,
            weekday=int(day),
            starting=starting.isoformat(),
            ending=ending.isoformat(),
        )
        return window

    @BaseService.measure_operation("get_window")
    def get_window(self, personnel_id: str, weekday: int) -> Optional[WeeklyScheduleWindow]:
        day = self.validate_weekday(weekday)
        with self.storage_errors("get_window"):
            return self.repository.get_window(personnel_id, day)

    @BaseService.measure_operation("list_windows")
    def list_windows(self, personnel_id: str) -> List[WeeklyScheduleWindow]:
        """All windows of a personnel member, Sunday first."""
        with self.storage_errors("list_windows"):
            return self.repository.list_for_personnel(personnel_id)
