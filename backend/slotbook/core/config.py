# backend/slotbook/core/config.py
import logging
import os
from pathlib import Path
from typing import Literal, Optional, Set

from dotenv import load_dotenv
from pydantic import Field, SecretStr, ValidationInfo, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import MAX_SERVICE_PRICE, SLOT_MINUTES
from .enums import SlotAnchor


logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # Goes up to backend/.env
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


PROD_SITE_MODES: Set[str] = {"prod", "production", "live"}
_DEV_SECRET_KEY = "dev-secret-key-not-for-production"


def _classify_site_mode(raw_site_mode: str | None) -> tuple[str, bool]:
    """Return normalized site mode and whether it is a production mode."""

    normalized = (raw_site_mode or "").strip().lower()
    return normalized, normalized in PROD_SITE_MODES


class Settings(BaseSettings):
    secret_key: SecretStr = Field(
        default=SecretStr(_DEV_SECRET_KEY),
        description="Secret key used to verify bearer tokens",
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 720  # 12 hours

    database_url_raw: str = Field(
        default="sqlite:///./slotbook.db",
        alias="database_url",
        description="SQLAlchemy URL of the relational store",
    )
    db_pool_size: int = Field(default=5, ge=1, description="Persistent pooled connections")
    db_max_overflow: int = Field(default=10, ge=0, description="Extra connections under load")
    db_pool_timeout: int = Field(
        default=5, ge=1, description="Seconds to wait for a pooled connection"
    )
    db_statement_timeout_ms: int = Field(
        default=15000,
        ge=0,
        description="PostgreSQL statement_timeout applied to every connection (0 disables)",
    )

    # Environment (derived from SITE_MODE)
    environment: str = (
        "production" if _classify_site_mode(os.getenv("SITE_MODE", "local"))[1] else "development"
    )
    is_testing: bool = False  # Set to True when running tests

    # Slot grid and catalog rules
    slot_minutes: int = Field(
        default=SLOT_MINUTES,
        ge=1,
        description="Granularity of the availability grid in minutes",
    )
    max_service_price: int = Field(
        default=MAX_SERVICE_PRICE,
        ge=0,
        description="Upper bound (inclusive) for a service price",
    )
    availability_slot_anchor: SlotAnchor = Field(
        default=SlotAnchor.START,
        description=(
            "Grid point reported as an available start: 'start' for the first point of a "
            "long-enough run, 'end' for the point at which the run became long enough"
        ),
    )

    slow_operation_seconds: float = Field(
        default=1.0, gt=0, description="Service operations slower than this are logged"
    )
    slow_request_ms: float = Field(
        default=500.0, gt=0, description="HTTP requests slower than this are logged"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    production_database_indicators: list[str] = [
        "amazonaws.com",
        "cloud.google.com",
        "database.azure.com",
        "render.com",
        "neon.tech",
    ]

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,  # allows SECRET_KEY to match secret_key
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("database_url_raw")
    @classmethod
    def _normalize_database_url(cls, v: str, info: ValidationInfo) -> str:
        cleaned = (v or "").strip()
        if not cleaned:
            raise ValueError("DATABASE_URL must not be empty")
        # Heroku-style URLs are rejected by SQLAlchemy 2.x
        if cleaned.startswith("postgres://"):
            cleaned = "postgresql://" + cleaned[len("postgres://") :]
        return cleaned

    @model_validator(mode="after")
    def _require_secret_in_production(self) -> "Settings":
        if self.environment == "production" and (
            self.secret_key.get_secret_value() == _DEV_SECRET_KEY
        ):
            raise ValueError("SECRET_KEY must be set in production environments.")
        return self

    def get_database_url(self) -> str:
        """Get the database URL for the current process."""
        return self.database_url_raw

    @property
    def is_sqlite(self) -> bool:
        return self.database_url_raw.startswith("sqlite")

    def is_production_database(self, url: Optional[str] = None) -> bool:
        """Check if a database URL appears to be a production database."""
        check_url = url or self.database_url_raw
        return any(
            indicator in check_url.lower() for indicator in self.production_database_indicators
        )


settings = Settings()
