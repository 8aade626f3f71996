"""Shared API helpers for route handlers."""

import logging

from fastapi import HTTPException

from integrations.exceptions import (
    AggregatorExchangeError,
    BankingError,
    ConfigurationError,
    ExternalServiceError,
    IdentityStoreError,
    InvalidShareableIdError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def http_error(exc: BankingError) -> HTTPException:
    """Translate an application error into the HTTP error the UI sees.

    Args:
        exc: The error raised by a service.

    Returns:
        An HTTPException to raise from the route.
    """
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, (AggregatorExchangeError, InvalidShareableIdError)):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, IdentityStoreError) and exc.status_code in (400, 409):
        # Appwrite rejects bad input (400) and duplicate accounts (409)
        return HTTPException(status_code=exc.status_code, detail=str(exc))
    if isinstance(exc, ExternalServiceError):
        return HTTPException(
            status_code=502,
            detail=f"{exc.service_name or 'External service'} request failed",
        )
    if isinstance(exc, ConfigurationError):
        logger.error("Configuration error: %s", exc)
        return HTTPException(status_code=500, detail="Server is not configured")
    return HTTPException(status_code=500, detail="Internal error")
