from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserCreatePayload(BaseModel):
    """
    Schema for registering a marketplace profile for an authenticated identity.
    """

    name: Optional[str] = Field(None, description="Display name")
    email: str = Field(..., min_length=3, description="Email address (unique)")
    image: Optional[str] = Field(None, description="Avatar URL on the media host")


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: Optional[str]
    email: str
    image: Optional[str]
    created_at: datetime
