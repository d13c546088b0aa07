"""UTC date utilities shared by the availability engine and the HTTP boundary."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Iterator, Union

DateLike = Union[date, datetime]


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-aware datetime.

    This function should be used instead of datetime.now() or datetime.utcnow()
    to ensure all timestamps are timezone-aware and stored in UTC.

    Example:
        >>> utc_now().tzinfo
        datetime.timezone.utc
    """
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Return the current calendar day in UTC."""
    return utc_now().date()


def to_utc_date(value: DateLike) -> date:
    """
    Normalise a date or datetime to a UTC calendar day.

    Naive datetimes are taken to already be in UTC. Aware datetimes are
    converted to UTC before the day is taken, so ``2024-06-01T23:30-05:00``
    becomes ``2024-06-02``.

    Args:
        value: A ``date`` or ``datetime`` as parsed from an ISO-8601 string

    Returns:
        date: The UTC calendar day
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def nights_between(start: date, end: date) -> int:
    """Number of whole nights between check-in ``start`` and check-out ``end``."""
    return (end - start).days


def periods_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """
    Closed-interval overlap test.

    ``[start_a, end_a]`` and ``[start_b, end_b]`` overlap iff
    ``start_a <= end_b and start_b <= end_a``. Sharing a boundary day
    (checkout of one stay == check-in of the next) counts as overlap.
    """
    return start_a <= end_b and start_b <= end_a


def iter_days(start: date, end: date) -> Iterator[date]:
    """
    Yield every calendar day in the inclusive range ``[start, end]``.

    Never steps past ``end``, so a range ending on ``date.max`` is safe.
    """
    for offset in range(nights_between(start, end) + 1):
        yield start + timedelta(days=offset)
