"""
Tenant membership models.

Tenants, accounts and memberships are owned by the account/tenant
management side of the platform. The booking engine only reads them, to
decide who may manage a tenant's schedules and services and which accounts
are personnel of a tenant.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<Tenant {self.name}>"


class TenantMember(Base):
    __tablename__ = "tenant_members"

    tenant_id = Column(String(26), ForeignKey("tenants.id", ondelete="CASCADE"), primary_key=True)
    account_id = Column(String(26), primary_key=True)
    is_manager = Column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        role = "manager" if self.is_manager else "member"
        return f"<TenantMember {self.account_id} {role} of {self.tenant_id}>"
