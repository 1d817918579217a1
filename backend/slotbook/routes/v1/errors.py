# backend/slotbook/routes/v1/errors.py
"""Conversion of domain exceptions raised by services into HTTP responses."""

import logging
from typing import NoReturn

from fastapi import HTTPException, status

from ...core.exceptions import DomainException, StorageException, raise_503_if_pool_exhaustion

logger = logging.getLogger(__name__)


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if isinstance(exc, StorageException) and isinstance(exc.__cause__, Exception):
        logger.error(f"Storage failure: {exc.message}", exc_info=exc.__cause__)
        raise_503_if_pool_exhaustion(exc.__cause__)
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
