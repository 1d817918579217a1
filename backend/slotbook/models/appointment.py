"""
Appointment model for SlotBook.

Appointments are self-contained: the personnel and the duration are
snapshotted from the service at booking time, so the ledger can be scanned
for blocked slots without joining back to services.
"""

from datetime import timedelta
import logging

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base

logger = logging.getLogger(__name__)

APPOINTMENT_UNIQUE_START_CONSTRAINT = "uq_appointments_personnel_starting"


class Appointment(Base):
    """
    Committed appointment between a customer and a service's personnel.

    ``starting`` and ``ending`` are naive local wall-clock instants.
    """

    __tablename__ = "appointments"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    service_id = Column(String(26), ForeignKey("services.id"), nullable=False)
    personnel_id = Column(String(26), nullable=False)
    customer_id = Column(String(26), nullable=False, index=True)

    starting = Column(DateTime(timezone=False), nullable=False)
    ending = Column(DateTime(timezone=False), nullable=False)
    duration_minutes = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    service = relationship("Service")

    __table_args__ = (
        UniqueConstraint("personnel_id", "starting", name=APPOINTMENT_UNIQUE_START_CONSTRAINT),
        Index("ix_appointments_personnel_range", "personnel_id", "starting", "ending"),
    )

    def __repr__(self) -> str:
        return f"<Appointment {self.id} {self.personnel_id} @ {self.starting}>"

    @property
    def duration(self) -> timedelta:
        return timedelta(minutes=int(self.duration_minutes))
