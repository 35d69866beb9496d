from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from app.schemas.item_schemas import ItemSummary


class DownloadUrlRequest(BaseModel):
    item_id: Optional[int] = None


class DownloadUrlResponse(BaseModel):
    url: str
    filename: str


class DownloadHistoryEntry(BaseModel):
    id: int
    created_at: datetime
    item: ItemSummary
