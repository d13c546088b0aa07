"""
Stay pricing.

The availability engine only knows ``nightly_price * nights + fees``. Which
fees exist and how much they are is decided here, by the caller.
"""

from __future__ import annotations

from datetime import date

from rental_market.config import CLEANING_FEE, SERVICE_FEE
from rental_market.schemas.listings import PriceQuote
from rental_market.utils.dates import nights_between


def compute_total_price(nightly_price: int, start: date, end: date, fees: int = 0) -> int:
    """
    Total price of a stay.

    Args:
        nightly_price: Listing price per night
        start: Check-in day
        end: Check-out day
        fees: Fixed amount added once per booking

    Returns:
        int: ``nightly_price * nights + fees``
    """
    return nightly_price * nights_between(start, end) + fees


def booking_fees() -> int:
    """Fixed fees charged once per booking (cleaning + service)."""
    return CLEANING_FEE + SERVICE_FEE


def quote_stay(nightly_price: int, start: date, end: date) -> PriceQuote:
    """
    Build the fee-inclusive quote shown before a guest books.

    Args:
        nightly_price: Listing price per night
        start: Check-in day
        end: Check-out day

    Returns:
        PriceQuote: Nights, base price, each fee and the total
    """
    nights = nights_between(start, end)
    base_price = nightly_price * nights
    return PriceQuote(
        nights=nights,
        nightly_price=nightly_price,
        base_price=base_price,
        cleaning_fee=CLEANING_FEE,
        service_fee=SERVICE_FEE,
        total_price=compute_total_price(nightly_price, start, end, booking_fees()),
    )
