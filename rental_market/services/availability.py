"""
Availability engine: booking proposals, host decisions and calendar blocks.

Rule enforced: for one listing, no two periods among its accepted
reservations and blocked periods overlap. Ranges are closed, so a stay
ending on the 10th and one starting on the 10th conflict.

Pending reservations never block anything. Any number of guests may request
the same dates; the range is re-validated when the host accepts one of them,
and the first accept wins. Competing pending requests are left pending for
the host to reject.

The engine is stateless. Each call must run inside one store transaction
(see rental_market.db.store) so the check and the write are atomic; the
store's unique night ledger turns a lost race into a ConflictError.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Iterable, Optional, Union
from uuid import UUID

import structlog

from rental_market.config import MAX_RANGE_DAYS
from rental_market.db.store import AvailabilityStore
from rental_market.errors import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from rental_market.metrics import blocked_periods, booking_proposals, reservation_decisions
from rental_market.models.reservations import Decision, ReservationStatus
from rental_market.schemas.availability import Period
from rental_market.services.pricing import compute_total_price
from rental_market.utils.dates import (
    DateLike,
    nights_between,
    periods_overlap,
    to_utc_date,
    utc_today,
)

logger = structlog.get_logger(__name__)

CONFLICT_MESSAGE = "Requested dates are already accepted or blocked"


def find_conflict(periods: Iterable[Period], start: date, end: date) -> Optional[Period]:
    """
    Return the first period overlapping ``[start, end]``, or None.

    Args:
        periods: Accepted reservations and blocked periods of one listing
        start: First day of the candidate range
        end: Last day of the candidate range

    Returns:
        Optional[Period]: A conflicting period if any
    """
    for period in periods:
        if periods_overlap(start, end, period.start_date, period.end_date):
            return period
    return None


def validate_range(
    start: Optional[DateLike],
    end: Optional[DateLike],
    today: Optional[date] = None,
    max_days: int = MAX_RANGE_DAYS,
) -> tuple[date, date]:
    """
    Normalise a date range to UTC days and check it.

    Args:
        start: Range start (date or datetime)
        end: Range end (date or datetime)
        today: When given, a start before this day is rejected
        max_days: Longest allowed range, in nights

    Returns:
        tuple[date, date]: The normalised ``(start, end)``

    Raises:
        ValidationError: Missing dates, ``end <= start``, a past start or a
            range longer than ``max_days``
    """
    if start is None or end is None:
        raise ValidationError("Start and end dates are required")

    start_day = to_utc_date(start)
    end_day = to_utc_date(end)

    if end_day <= start_day:
        raise ValidationError("End date must be after start date")
    if nights_between(start_day, end_day) > max_days:
        raise ValidationError(f"Date range cannot exceed {max_days} nights")
    if today is not None and start_day < today:
        raise ValidationError("Start date cannot be in the past")

    return start_day, end_day


class AvailabilityEngine:
    """
    Decides whether a date range may be booked or blocked for a listing.

    Args:
        store: Store bound to the current transaction
        today: Clock used for the past-start check (UTC day)

    Example:
        >>> with engine.begin() as conn:
        ...     availability = AvailabilityEngine(SqlAvailabilityStore(conn))
        ...     reservation = availability.propose_booking(listing_id, guest_id, start, end)
    """

    def __init__(self, store: AvailabilityStore, today: Callable[[], date] = utc_today) -> None:
        self.store = store
        self.today = today

    def propose_booking(
        self,
        listing_id: UUID,
        guest_id: UUID,
        start: Optional[DateLike],
        end: Optional[DateLike],
        fees: int = 0,
    ) -> dict[str, Any]:
        """
        Create a pending reservation.

        Only accepted reservations and blocked periods are checked; other
        pending requests for the same dates are ignored.

        Args:
            listing_id: Listing to book
            guest_id: Acting guest
            start: Check-in day
            end: Check-out day
            fees: Fixed amount the caller adds to ``nightly_price * nights``

        Returns:
            dict: The new pending reservation

        Raises:
            ValidationError: Bad range, past start or a host booking their own listing
            NotFoundError: Listing does not exist
            ConflictError: Range overlaps an accepted reservation or blocked period
        """
        try:
            start_day, end_day = validate_range(start, end, today=self.today())

            listing = self.store.get_listing(listing_id)
            if listing is None:
                raise NotFoundError(f"Listing {listing_id} not found")
            if listing["owner_id"] == guest_id:
                raise ValidationError("Hosts cannot book their own listing")

            conflict = find_conflict(
                self.store.list_unavailable_periods(listing_id), start_day, end_day
            )
            if conflict is not None:
                logger.info(
                    "booking_conflict",
                    listing_id=str(listing_id),
                    start_date=start_day.isoformat(),
                    end_date=end_day.isoformat(),
                    conflicting_kind=conflict.kind,
                    conflicting_id=str(conflict.id),
                )
                raise ConflictError(CONFLICT_MESSAGE)

            total_price = compute_total_price(listing["price"], start_day, end_day, fees)
            reservation = self.store.create_reservation(
                listing_id, guest_id, start_day, end_day, total_price
            )
        except ConflictError:
            booking_proposals.labels(outcome="conflict").inc()
            raise
        except NotFoundError:
            booking_proposals.labels(outcome="not_found").inc()
            raise
        except ValidationError:
            booking_proposals.labels(outcome="invalid").inc()
            raise

        booking_proposals.labels(outcome="created").inc()
        logger.info(
            "booking_proposed",
            reservation_id=str(reservation["id"]),
            listing_id=str(listing_id),
            guest_id=str(guest_id),
            start_date=start_day.isoformat(),
            end_date=end_day.isoformat(),
            total_price=total_price,
        )
        return reservation

    def decide_reservation(
        self,
        reservation_id: UUID,
        decider_user_id: UUID,
        decision: Union[Decision, str],
    ) -> dict[str, Any]:
        """
        Accept or reject a pending reservation as the listing's owner.

        Rejecting is unconditional. Accepting re-validates the range against
        the listing's current accepted reservations and blocked periods,
        excluding the reservation itself; on conflict the reservation stays
        pending. Repeating the decision a reservation already has returns it
        unchanged.

        Args:
            reservation_id: Reservation to decide
            decider_user_id: Acting user, must own the listing
            decision: ``accept`` or ``reject``

        Returns:
            dict: The reservation after the decision

        Raises:
            ValidationError: Unknown decision
            NotFoundError: Reservation (or its listing) does not exist
            AuthorizationError: Actor does not own the listing
            InvalidStateError: Opposite decision already taken
            ConflictError: Accepting would overlap an accepted or blocked period
        """
        try:
            decision = Decision(decision)
        except ValueError:
            raise ValidationError(f"Unknown decision: {decision!r}") from None

        reservation = self.store.get_reservation(reservation_id)
        if reservation is None:
            raise NotFoundError(f"Reservation {reservation_id} not found")

        # Lock the listing so concurrent accepts and blocks on it serialise
        listing = self.store.get_listing(reservation["listing_id"], for_update=True)
        if listing is None:
            raise NotFoundError(f"Listing {reservation['listing_id']} not found")
        if listing["owner_id"] != decider_user_id:
            reservation_decisions.labels(decision=decision.value, outcome="forbidden").inc()
            raise AuthorizationError("Only the listing owner can decide on reservations")

        reservation = self.store.get_reservation(reservation_id, for_update=True)
        if reservation is None:
            raise NotFoundError(f"Reservation {reservation_id} not found")

        target = (
            ReservationStatus.ACCEPTED
            if decision is Decision.ACCEPT
            else ReservationStatus.REJECTED
        )
        status = ReservationStatus(reservation["status"])

        if status is target:
            reservation_decisions.labels(decision=decision.value, outcome="unchanged").inc()
            return reservation
        if status is not ReservationStatus.PENDING:
            reservation_decisions.labels(decision=decision.value, outcome="invalid_state").inc()
            raise InvalidStateError(f"Reservation is already {status.value}")

        if decision is Decision.REJECT:
            self.store.reject_reservation(reservation_id)
        else:
            conflict = find_conflict(
                self.store.list_unavailable_periods(
                    reservation["listing_id"], exclude_reservation_id=reservation_id
                ),
                reservation["start_date"],
                reservation["end_date"],
            )
            try:
                if conflict is not None:
                    logger.info(
                        "accept_conflict",
                        reservation_id=str(reservation_id),
                        conflicting_kind=conflict.kind,
                        conflicting_id=str(conflict.id),
                    )
                    raise ConflictError(CONFLICT_MESSAGE)
                self.store.accept_reservation(reservation)
            except ConflictError:
                reservation_decisions.labels(decision=decision.value, outcome="conflict").inc()
                raise

        reservation_decisions.labels(decision=decision.value, outcome=target.value).inc()
        logger.info(
            f"reservation_{target.value}",
            reservation_id=str(reservation_id),
            listing_id=str(reservation["listing_id"]),
            decider_user_id=str(decider_user_id),
        )
        return {**reservation, "status": target.value}

    def block_dates(
        self,
        listing_id: UUID,
        owner_user_id: UUID,
        start: Optional[DateLike],
        end: Optional[DateLike],
    ) -> dict[str, Any]:
        """
        Block a date range on a listing's calendar.

        Args:
            listing_id: Listing to block
            owner_user_id: Acting user, must own the listing
            start: First blocked day
            end: Last blocked day

        Returns:
            dict: The new blocked period

        Raises:
            ValidationError: ``end <= start``
            NotFoundError: Listing does not exist
            AuthorizationError: Actor does not own the listing
            ConflictError: Range overlaps an accepted reservation or another block
        """
        start_day, end_day = validate_range(start, end)

        listing = self.store.get_listing(listing_id, for_update=True)
        if listing is None:
            raise NotFoundError(f"Listing {listing_id} not found")
        if listing["owner_id"] != owner_user_id:
            blocked_periods.labels(operation="block", outcome="forbidden").inc()
            raise AuthorizationError("Only the listing owner can block dates")

        try:
            conflict = find_conflict(
                self.store.list_unavailable_periods(listing_id), start_day, end_day
            )
            if conflict is not None:
                logger.info(
                    "block_conflict",
                    listing_id=str(listing_id),
                    start_date=start_day.isoformat(),
                    end_date=end_day.isoformat(),
                    conflicting_kind=conflict.kind,
                    conflicting_id=str(conflict.id),
                )
                raise ConflictError(CONFLICT_MESSAGE)
            blocked = self.store.create_blocked_period(listing_id, start_day, end_day)
        except ConflictError:
            blocked_periods.labels(operation="block", outcome="conflict").inc()
            raise

        blocked_periods.labels(operation="block", outcome="success").inc()
        logger.info(
            "dates_blocked",
            blocked_period_id=str(blocked["id"]),
            listing_id=str(listing_id),
            start_date=start_day.isoformat(),
            end_date=end_day.isoformat(),
        )
        return blocked

    def unblock_dates(self, blocked_period_id: UUID, owner_user_id: UUID) -> None:
        """
        Remove a blocked period.

        Args:
            blocked_period_id: Blocked period to remove
            owner_user_id: Acting user, must own the parent listing

        Raises:
            NotFoundError: Blocked period (or its listing) does not exist
            AuthorizationError: Actor does not own the listing
        """
        blocked = self.store.get_blocked_period(blocked_period_id)
        if blocked is None:
            raise NotFoundError(f"Blocked period {blocked_period_id} not found")

        listing = self.store.get_listing(blocked["listing_id"])
        if listing is None:
            raise NotFoundError(f"Listing {blocked['listing_id']} not found")
        if listing["owner_id"] != owner_user_id:
            blocked_periods.labels(operation="unblock", outcome="forbidden").inc()
            raise AuthorizationError("Only the listing owner can unblock dates")

        self.store.delete_blocked_period(blocked_period_id)

        blocked_periods.labels(operation="unblock", outcome="success").inc()
        logger.info(
            "dates_unblocked",
            blocked_period_id=str(blocked_period_id),
            listing_id=str(blocked["listing_id"]),
        )
