from pydantic import BaseModel, EmailStr ,model_validator
from typing import Optional
from datetime import datetime


class UserRegister(BaseModel):
    username: Optional[str] = None
    email: EmailStr
    password: str
    confirm_password: str

    @model_validator(mode="after")
    def validate_passwords(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self

class UserResponse(BaseModel):
    message: str
    user_id: int
    email: EmailStr
    role: str

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class DiscordTokenRequest(BaseModel):
    access_token: str

class Token(BaseModel):
    access_token: str
    token_type: str


class ProfileResponse(BaseModel):
    id: int
    email: str
    username: str
    auth_provider: str
    role: str
    discord_webhook_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

class ProfileUpdate(BaseModel):
    username: str


class WebhookSettings(BaseModel):
    discord_webhook_url: Optional[str] = None
