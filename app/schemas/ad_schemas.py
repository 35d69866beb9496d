from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class AdCreate(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    expires_at: Optional[datetime] = None


class AdResponse(BaseModel):
    id: int
    title: str
    content: str
    image_url: Optional[str] = None
    is_active: bool
    expires_at: datetime
    created_at: datetime

    class Config:
        from_attributes = True


class CleanupResponse(BaseModel):
    success: bool
    message: str
    count: int
