"""Versioned API routers, mounted under /api/v1 in main.py."""

from . import appointments, health, schedules, services

__all__ = ["appointments", "health", "schedules", "services"]
