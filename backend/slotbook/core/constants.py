"""Application-wide constants for the SlotBook booking backend."""

from __future__ import annotations

import os

API_TITLE = "SlotBook API"
API_DESCRIPTION = "Availability and booking engine for service businesses"
API_VERSION = "1.0.0"

# Slot grid: every schedule window is cut into 30-minute grid points
SLOT_MINUTES = 30

# Service constraints
MIN_SERVICE_PRICE = 0
MAX_SERVICE_PRICE = 1_000_000
PRICE_QUANTUM = "0.01"
MAX_SERVICE_NAME_LENGTH = 255

# Frontend URLs
DEFAULT_DEV_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def _split_env(name: str) -> list[str]:
    value = os.getenv(name, "")
    return [origin.strip() for origin in value.split(",") if origin.strip()]


ALLOWED_ORIGINS = _split_env("ALLOWED_ORIGINS") or _split_env("CORS_ALLOW_ORIGINS") or DEFAULT_DEV_ORIGINS
