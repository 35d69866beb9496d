from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class Profile(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    username: str
    password_hash: Optional[str] = None
    auth_provider: str = Field(default="email")    # email | discord
    discord_user_id: Optional[str] = Field(default=None, index=True, unique=True)
    discord_webhook_url: Optional[str] = None
    role: str = Field(default="user")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
