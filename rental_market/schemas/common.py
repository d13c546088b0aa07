"""Shared pydantic field types for request payloads."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BeforeValidator
from typing_extensions import Annotated

from rental_market.utils.dates import to_utc_date


def _coerce_utc_date(value: Any) -> Any:
    """Accept ISO-8601 dates or date-times and keep only the UTC calendar day."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            # Let pydantic's own date parser produce the error message
            return value
    if isinstance(value, (date, datetime)):
        return to_utc_date(value)
    return value


UtcDate = Annotated[date, BeforeValidator(_coerce_utc_date)]
