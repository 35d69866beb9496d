from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.schemas.item_schemas import ItemSummary


class RatingSubmit(BaseModel):
    rating: int = Field(..., ge=1, le=5)


class RatingSummary(BaseModel):
    item_id: int
    average: float
    count: int
    your_rating: Optional[int] = None


class FavoriteState(BaseModel):
    item_id: int
    favorited: bool


class FavoriteEntry(BaseModel):
    id: int
    created_at: datetime
    item: ItemSummary
