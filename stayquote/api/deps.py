"""Shared API dependencies — single import point for all routers.

Re-exports the database session and provides tenant resolution and the
mapping from quote errors to HTTP responses::

    from stayquote.api.deps import get_db, get_tenant_id, quote_error_to_http
"""

import uuid

from fastapi import Header, HTTPException, status

from stayquote.database import get_db
from stayquote.pricing import (
    CheckoutValidationError,
    InvalidDateRangeError,
    QuoteError,
    QuoteMismatchError,
    RoomInactiveError,
    RoomNotFoundError,
    TenantMismatchError,
)

_QUOTE_ERROR_STATUS: dict[type[QuoteError], int] = {
    RoomNotFoundError: status.HTTP_404_NOT_FOUND,
    TenantMismatchError: status.HTTP_403_FORBIDDEN,
    InvalidDateRangeError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    RoomInactiveError: status.HTTP_409_CONFLICT,
    CheckoutValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    QuoteMismatchError: status.HTTP_409_CONFLICT,
}


async def get_tenant_id(
    x_tenant_id: str | None = Header(None, description="Tenant the request acts on"),
) -> uuid.UUID:
    """Resolve the acting tenant from the ``X-Tenant-ID`` header.

    Raises:
        HTTPException 400: If the header is missing or not a UUID.
    """
    if not x_tenant_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Tenant ID required",
        )
    try:
        return uuid.UUID(x_tenant_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid tenant ID",
        ) from None


def quote_error_to_http(exc: QuoteError) -> HTTPException:
    """Translate a quote error into an HTTP error with a distinct status code."""
    status_code = _QUOTE_ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=status_code, detail=str(exc))


__all__ = [
    "get_db",
    "get_tenant_id",
    "quote_error_to_http",
]
