"""
Weekly schedule model for SlotBook.

A weekly schedule window is a recurring availability rule: on a given
weekday, a personnel member can be booked between ``starting`` and
``ending`` (times of day, naive local wall clock). There is at most one
window per (personnel, weekday); issuing a new one replaces it.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String, Time, UniqueConstraint
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class WeeklyScheduleWindow(Base):
    __tablename__ = "weekly_schedule_windows"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    personnel_id = Column(String(26), nullable=False)
    # 0 = Sunday .. 6 = Saturday (see core.enums.Weekday)
    weekday = Column(Integer, nullable=False)
    starting = Column(Time, nullable=False)
    ending = Column(Time, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_now_utc,
        onupdate=_now_utc,
        server_default=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("personnel_id", "weekday", name="uq_schedule_personnel_weekday"),
        Index("ix_schedule_personnel", "personnel_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<WeeklyScheduleWindow {self.personnel_id} weekday={self.weekday} "
            f"{self.starting}-{self.ending}>"
        )
