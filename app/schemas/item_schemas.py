from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class ItemResponse(BaseModel):
    id: int
    name: str
    description: str
    price: float
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    image_url: Optional[str] = None
    downloads: int
    rating: float
    ratings_count: int
    created_at: datetime

    class Config:
        from_attributes = True


class ItemPage(BaseModel):
    total_items: int
    total_pages: int
    current_page: int
    limit: int
    results: List[ItemResponse]


class ItemSummary(BaseModel):
    id: int
    name: str
    description: str
    price: float
    image_url: Optional[str] = None
    rating: float
    category_name: Optional[str] = None


class ItemAccessResponse(BaseModel):
    item_id: int
    allowed: bool
    reason: str


class ItemPublishResponse(BaseModel):
    message: str
    item: ItemResponse
