"""
Domain error taxonomy for the availability engine and its boundary.

The engine raises these; route handlers translate them into HTTP responses
(see rental_market.routes._errors). Infrastructure errors from SQLAlchemy
are not wrapped and propagate unchanged.
"""

from __future__ import annotations


class RentalMarketError(Exception):
    """Base class for every error the marketplace raises on purpose."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(RentalMarketError):
    """Malformed input: zero/negative-length range, past start date, bad decision."""


class ConflictError(RentalMarketError):
    """Requested dates overlap an accepted reservation or a blocked period."""


class AuthorizationError(RentalMarketError):
    """Actor does not own the resource it is trying to mutate or read."""


class NotFoundError(RentalMarketError):
    """Referenced listing, reservation, blocked period or user does not exist."""


class InvalidStateError(RentalMarketError):
    """Attempted transition out of a terminal reservation status."""
