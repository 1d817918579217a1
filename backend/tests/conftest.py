# backend/tests/conftest.py
"""
Pytest configuration for the SlotBook backend.

Tests run against an in-memory SQLite database by default. Set
TEST_DATABASE_URL to run them against a local PostgreSQL test database;
production-looking URLs are refused.
"""

import os
import sys

# CRITICAL: Set testing mode BEFORE any slotbook imports!
os.environ["is_testing"] = "true"
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SITE_MODE", "local")

# Add the backend directory to Python path so imports work
backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

from datetime import date, time, timedelta
from decimal import Decimal
from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from slotbook.api.dependencies.database import get_db
from slotbook.auth import create_access_token
from slotbook.core.config import settings
from slotbook.core.ulid_helper import generate_ulid
from slotbook.database import Base
from slotbook.main import app
from slotbook.models import Service, Tenant, TenantMember, WeeklyScheduleWindow

settings.is_testing = True

# 2026-10-19 is a Monday (weekday 1 with Sunday = 0)
MONDAY = date(2026, 10, 19)
SUNDAY = date(2026, 10, 18)


def _validate_test_database_url(database_url: str) -> None:
    """Refuse to run the suite against something that looks like production."""
    if settings.is_production_database(database_url):
        raise RuntimeError(
            "CRITICAL ERROR: refusing to run tests against a production database URL "
            f"({database_url[:30]}...). Set TEST_DATABASE_URL to a local test database."
        )


TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")
_validate_test_database_url(TEST_DATABASE_URL)

if TEST_DATABASE_URL.startswith("sqlite"):
    test_engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    test_engine = create_engine(TEST_DATABASE_URL)

TestSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=test_engine, expire_on_commit=False
)


@pytest.fixture(scope="function")
def db():
    """
    Create a new database session for each test.

    The schema is created before and dropped after every test.
    """
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    yield session
    session.rollback()
    session.close()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db: Session):
    """Create a test client bound to the test session."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()
    test_client.close()


@pytest.fixture
def tenant(db: Session) -> Tenant:
    tenant = Tenant(name="Corner Barbers")
    db.add(tenant)
    db.commit()
    return tenant


@pytest.fixture
def manager_id(db: Session, tenant: Tenant) -> str:
    account_id = generate_ulid()
    db.add(TenantMember(tenant_id=tenant.id, account_id=account_id, is_manager=True))
    db.commit()
    return account_id


@pytest.fixture
def personnel_id(db: Session, tenant: Tenant) -> str:
    account_id = generate_ulid()
    db.add(TenantMember(tenant_id=tenant.id, account_id=account_id, is_manager=False))
    db.commit()
    return account_id


@pytest.fixture
def customer_id() -> str:
    return generate_ulid()


def _auth_headers(account_id: str) -> Dict[str, str]:
    token = create_access_token({"sub": account_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def manager_headers(manager_id: str) -> Dict[str, str]:
    return _auth_headers(manager_id)


@pytest.fixture
def personnel_headers(personnel_id: str) -> Dict[str, str]:
    return _auth_headers(personnel_id)


@pytest.fixture
def customer_headers(customer_id: str) -> Dict[str, str]:
    return _auth_headers(customer_id)


@pytest.fixture
def make_window(db: Session, personnel_id: str) -> Callable[..., WeeklyScheduleWindow]:
    """Insert a schedule window directly, bypassing service validation."""

    def _make(
        weekday: int = 1,
        starting: time = time(10, 0),
        ending: time = time(18, 0),
        personnel: str = "",
    ) -> WeeklyScheduleWindow:
        window = WeeklyScheduleWindow(
            personnel_id=personnel or personnel_id,
            weekday=weekday,
            starting=starting,
            ending=ending,
        )
        db.add(window)
        db.commit()
        return window

    return _make


@pytest.fixture
def make_service(db: Session, tenant: Tenant, personnel_id: str) -> Callable[..., Service]:
    def _make(
        duration: timedelta = timedelta(hours=1),
        price: Decimal = Decimal("25.00"),
        name: str = "Haircut",
    ) -> Service:
        service = Service(
            tenant_id=tenant.id,
            personnel_id=personnel_id,
            name=name,
            price=price,
            duration_minutes=int(duration.total_seconds() // 60),
        )
        db.add(service)
        db.commit()
        return service

    return _make
