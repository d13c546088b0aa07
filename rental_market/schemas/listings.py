from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ListingCreatePayload(BaseModel):
    """
    Schema for creating a listing. The owner is always the acting user.
    """

    title: str = Field(..., min_length=1, description="Listing headline")
    description: str = Field("", description="Free-text description")
    image_src: Optional[str] = Field(None, description="Image URL on the media host")
    category: str = Field(..., min_length=1, description="Category, e.g. Beach, Cabin")
    room_count: int = Field(..., gt=0)
    bathroom_count: int = Field(..., gt=0)
    guest_count: int = Field(..., gt=0)
    location_value: str = Field(..., min_length=1, description="Location string")
    price: int = Field(..., gt=0, description="Nightly price in whole currency units")


class ListingUpdatePayload(BaseModel):
    """
    Schema for updating a listing. All fields are optional; owner cannot change.
    """

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    image_src: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    room_count: Optional[int] = Field(None, gt=0)
    bathroom_count: Optional[int] = Field(None, gt=0)
    guest_count: Optional[int] = Field(None, gt=0)
    location_value: Optional[str] = Field(None, min_length=1)
    price: Optional[int] = Field(None, gt=0)


class ListingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    title: str
    description: str
    image_src: Optional[str]
    category: str
    room_count: int
    bathroom_count: int
    guest_count: int
    location_value: str
    price: int
    created_at: datetime


class PriceQuote(BaseModel):
    """Fee-inclusive price for a stay, as shown before booking."""

    nights: int
    nightly_price: int
    base_price: int
    cleaning_fee: int
    service_fee: int
    total_price: int
