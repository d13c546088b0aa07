from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from rental_market.schemas.common import UtcDate


class BlockedPeriodCreatePayload(BaseModel):
    """
    Schema for a host blocking a date range on one of their listings.
    """

    listing_id: UUID = Field(..., description="Listing to block")
    start_date: UtcDate = Field(..., description="First blocked day")
    end_date: UtcDate = Field(..., description="Last blocked day")


class BlockedPeriodOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    listing_id: UUID
    start_date: date
    end_date: date
    created_at: datetime


class Period(BaseModel):
    """
    A date range that makes a listing unavailable: an accepted reservation
    or a blocked period.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["reservation", "blocked"]
    id: UUID
    start_date: date
    end_date: date

