"""Create the SlotBook tables on the configured database.

Usage:
    python -m slotbook.init_db
"""

import logging

from .database import Base, engine
from .models import Appointment, Service, Tenant, TenantMember, WeeklyScheduleWindow  # noqa: F401

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create every mapped table that does not exist yet."""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully")


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    init_db()
