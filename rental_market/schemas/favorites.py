from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class FavoriteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    listing_id: UUID
    created_at: datetime
