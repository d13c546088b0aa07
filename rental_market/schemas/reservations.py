from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from rental_market.models.reservations import Decision, ReservationStatus
from rental_market.schemas.common import UtcDate


class ReservationCreatePayload(BaseModel):
    """
    Schema for a guest's booking request. Dates may be ISO-8601 dates or
    date-times; only the UTC calendar day is kept.
    """

    listing_id: UUID = Field(..., description="Listing to book")
    start_date: UtcDate = Field(..., description="Check-in day")
    end_date: UtcDate = Field(..., description="Check-out day")


class ReservationDecisionPayload(BaseModel):
    decision: Decision = Field(..., description="accept or reject")


class ReservationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    listing_id: UUID
    guest_id: UUID
    start_date: date
    end_date: date
    total_price: int
    status: ReservationStatus
    created_at: datetime
