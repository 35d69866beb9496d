from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class Ad(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    content: str
    image_url: Optional[str] = None
    is_active: bool = Field(default=True)
    expires_at: datetime = Field(index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
