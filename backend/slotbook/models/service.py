"""
Service model for SlotBook.

A service is something a tenant sells: it is performed by exactly one
personnel member, takes a fixed amount of time and has a price. Services
are immutable once created.
"""

from datetime import timedelta
import logging

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base

logger = logging.getLogger(__name__)


class Service(Base):
    """
    Bookable service offered by one personnel member of a tenant.

    Attributes:
        id: ULID primary key
        tenant_id: Owning tenant
        personnel_id: Account performing the service
        name: Display name
        price: Price in the tenant's currency, two decimal places
        duration_minutes: Length of one appointment, a multiple of the slot grid
    """

    __tablename__ = "services"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    tenant_id = Column(String(26), ForeignKey("tenants.id"), nullable=False)
    personnel_id = Column(String(26), nullable=False)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_services_price_non_negative"),
        CheckConstraint("duration_minutes > 0", name="ck_services_duration_positive"),
        Index("ix_services_tenant_personnel", "tenant_id", "personnel_id"),
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        logger.debug(
            f"Creating service '{kwargs.get('name')}' for personnel {kwargs.get('personnel_id')}"
        )

    def __repr__(self) -> str:
        return f"<Service {self.name} ${self.price} {self.duration_minutes}min>"

    @property
    def duration(self) -> timedelta:
        return timedelta(minutes=int(self.duration_minutes))
