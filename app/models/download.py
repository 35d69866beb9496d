from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from sqlalchemy import Column, ForeignKey, Integer


class Download(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="profile.id", index=True)
    item_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("item.id", ondelete="CASCADE"),
            nullable=False
        )
    )
    created_at: datetime = Field(default_factory=datetime.utcnow)
