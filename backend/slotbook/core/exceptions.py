# backend/slotbook/core/exceptions.py
"""
Domain-specific exceptions for the SlotBook platform.

These exceptions provide clear, business-focused error messages
that can be caught and handled appropriately at the API layer.
Every rejection of a request maps to exactly one of them.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class UnauthorizedException(DomainException):
    """Raised when the caller is not authenticated."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenException(DomainException):
    """Raised when the caller lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message or "An error occurred processing your request",
                "code": self.code,
                "details": self.details if self.details else {},
            },
        )


# Specific business exceptions


class InvalidWeekdayException(ValidationException):
    """Raised when a schedule weekday is outside Sunday..Saturday."""

    def __init__(self, weekday: object):
        super().__init__(
            message="invalid weekday",
            code="INVALID_WEEKDAY",
            details={"weekday": weekday, "allowed": "0 (Sunday) .. 6 (Saturday)"},
        )


class InvalidScheduleWindowException(ValidationException):
    """Raised when a schedule window does not start before it ends."""

    def __init__(self, starting: str, ending: str):
        super().__init__(
            message="schedule window must start before it ends",
            code="INVALID_SCHEDULE_WINDOW",
            details={"starting": starting, "ending": ending},
        )


class InvalidPriceException(ValidationException):
    """Raised when a service price is outside the accepted range."""

    def __init__(self, price: object, maximum: int):
        super().__init__(
            message="invalid price",
            code="INVALID_PRICE",
            details={"price": str(price), "minimum": 0, "maximum": maximum},
        )


class InvalidDurationException(ValidationException):
    """Raised when a service duration does not fit the slot grid."""

    def __init__(self, duration_seconds: float, slot_minutes: int):
        super().__init__(
            message="invalid duration",
            code="INVALID_DURATION",
            details={"duration_seconds": duration_seconds, "slot_minutes": slot_minutes},
        )


class InvalidTimeException(ValidationException):
    """Raised when a requested start is not one of the open slots."""

    def __init__(self, desired_start: datetime):
        super().__init__(
            message="invalid time",
            code="INVALID_TIME",
            details={"starting": desired_start.isoformat()},
        )


class ServiceNotFoundException(NotFoundException):
    """Raised when a service id does not resolve."""

    def __init__(self, service_id: str):
        super().__init__(
            message="service not found",
            code="SERVICE_NOT_FOUND",
            details={"service_id": service_id},
        )


class PersonnelNotFoundException(NotFoundException):
    """Raised when an account is not a member of the tenant in the path."""

    def __init__(self, tenant_id: str, personnel_id: str):
        super().__init__(
            message="personnel not found",
            code="PERSONNEL_NOT_FOUND",
            details={"tenant_id": tenant_id, "personnel_id": personnel_id},
        )


class BookingConflictException(ConflictException):
    """Raised when a concurrent booking took the requested slot first."""

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message or "This time slot conflicts with an existing appointment",
            code="BOOKING_CONFLICT",
            details=details or {},
        )


class StorageException(ServiceException):
    """Raised when the relational store fails; the only class worth a caller retry."""

    def __init__(self, operation: str, error: Optional[BaseException] = None):
        super().__init__(
            message=f"Storage failure during {operation}",
            code="STORAGE_ERROR",
            details={"operation": operation, "error_type": type(error).__name__ if error else None},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """


def is_db_pool_exhaustion(exc: Exception) -> bool:
    """
    Check if an exception indicates DB connection pool exhaustion.

    This is a common failure mode under high load when all database
    connections are in use and new requests time out waiting.
    """
    error_str = str(exc).lower()
    return "queuepool" in error_str or (
        "timeout" in error_str and ("connection" in error_str or "pool" in error_str)
    )


def raise_503_if_pool_exhaustion(exc: Exception) -> None:
    """
    Convert DB pool exhaustion errors to HTTP 503 (Service Unavailable).

    Raises:
        HTTPException: 503 if pool exhaustion detected
        Does not raise if not pool exhaustion (caller should re-raise original)
    """
    if is_db_pool_exhaustion(exc):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service temporarily overloaded. Please retry.",
            headers={"Retry-After": "2"},
        )
