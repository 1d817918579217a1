# backend/slotbook/repositories/appointment_repository.py
"""
Appointment Repository for SlotBook

The appointment ledger: persists committed appointments and answers range
queries for a personnel member. All instants are naive local wall-clock
datetimes.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, cast

from sqlalchemy.orm import Session

from ..models.appointment import Appointment
from .base_repository import BaseRepository


class AppointmentRepository(BaseRepository[Appointment]):
    def __init__(self, db: Session):
        super().__init__(db, Appointment)

    def list_overlapping(
        self, personnel_id: str, range_start: datetime, range_end: datetime
    ) -> List[Appointment]:
        """
        Appointments of the personnel that overlap ``[range_start, range_end)``.

        Ordered by start so callers can sweep them alongside the slot grid.
        """
        query = (
            self._build_query()
            .filter(
                Appointment.personnel_id == personnel_id,
                Appointment.starting < range_end,
                Appointment.ending > range_start,
            )
            .order_by(Appointment.starting)
        )
        return cast(List[Appointment], self._execute_query(query))

    def insert(
        self,
        *,
        service_id: str,
        personnel_id: str,
        customer_id: str,
        starting: datetime,
        ending: datetime,
        duration_minutes: int,
    ) -> Appointment:
        """Insert one appointment. IntegrityError propagates for conflict mapping."""
        return self.create(
            service_id=service_id,
            personnel_id=personnel_id,
            customer_id=customer_id,
            starting=starting,
            ending=ending,
            duration_minutes=duration_minutes,
        )
