"""
Translation of domain errors into HTTP responses.

The availability engine raises RentalMarketError subclasses and knows nothing
about HTTP. Route handlers pass them through ``to_http_exception``.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from rental_market.errors import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    RentalMarketError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[RentalMarketError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidStateError: status.HTTP_400_BAD_REQUEST,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}


def to_http_exception(err: RentalMarketError) -> HTTPException:
    """
    Map a domain error to an HTTPException carrying its message.

    Args:
        err: Error raised by the engine or a route helper

    Returns:
        HTTPException: 400/403/404/409, or 500 for an unmapped subclass
    """
    for error_type, status_code in STATUS_BY_ERROR.items():
        if isinstance(err, error_type):
            return HTTPException(status_code=status_code, detail=err.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=err.message)
