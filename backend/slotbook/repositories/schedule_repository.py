# backend/slotbook/repositories/schedule_repository.py
"""
Schedule Repository for SlotBook

Data access for weekly schedule windows. There is at most one window per
(personnel, weekday); ``upsert_window`` replaces the previous one in place.
"""

from __future__ import annotations

from datetime import time
import logging
from typing import List, Optional, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.schedule import WeeklyScheduleWindow
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ScheduleRepository(BaseRepository[WeeklyScheduleWindow]):
    def __init__(self, db: Session):
        super().__init__(db, WeeklyScheduleWindow)

    def get_window(
        self, personnel_id: str, weekday: int, *, for_update: bool = False
    ) -> Optional[WeeklyScheduleWindow]:
        """
        Fetch the window for (personnel, weekday).

        With ``for_update`` the row is locked until the surrounding transaction
        ends, which serialises bookings against the same personnel and weekday.
        SQLite ignores the clause; its writers are serialised already.
        """
        query = self._build_query().filter(
            WeeklyScheduleWindow.personnel_id == personnel_id,
            WeeklyScheduleWindow.weekday == int(weekday),
        )
        if for_update:
            query = query.with_for_update()
        return self._execute_first(query)

    def list_for_personnel(self, personnel_id: str) -> List[WeeklyScheduleWindow]:
        query = (
            self._build_query()
            .filter(WeeklyScheduleWindow.personnel_id == personnel_id)
            .order_by(WeeklyScheduleWindow.weekday)
        )
        return cast(List[WeeklyScheduleWindow], self._execute_query(query))

    def upsert_window(
        self, personnel_id: str, weekday: int, starting: time, ending: time
    ) -> WeeklyScheduleWindow:
        """Insert or replace the window for (personnel, weekday). Does not commit."""
        try:
            row = (
                self.db.query(WeeklyScheduleWindow)
                .filter(
                    WeeklyScheduleWindow.personnel_id == personnel_id,
                    WeeklyScheduleWindow.weekday == int(weekday),
                )
                .with_for_update()
                .one_or_none()
            )
            if row:
                row.starting = starting
                row.ending = ending
            else:
                row = WeeklyScheduleWindow(
                    personnel_id=personnel_id,
                    weekday=int(weekday),
                    starting=starting,
                    ending=ending,
                )
                self.db.add(row)
            self.db.flush()
            return row
        except SQLAlchemyError as e:
            self.logger.error(
                f"Error upserting schedule for {personnel_id} weekday {weekday}: {str(e)}"
            )
            raise RepositoryException(f"Failed to upsert schedule window: {str(e)}") from e
