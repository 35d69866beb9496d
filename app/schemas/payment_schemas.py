from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class PaymentSessionRequest(BaseModel):
    # optional so that absent fields produce the "Missing required fields" error
    item_id: Optional[int] = None
    amount: Optional[float] = None
    currency: Optional[str] = None


class PaymentSessionResponse(BaseModel):
    payment_id: int
    payment_url: str
    order_id: str
    amount: float
    currency: str
    deposit_address: str


class PaymentStatusResponse(BaseModel):
    item_id: int
    status: str   # completed | pending | failed | none
    purchased: bool


class PaymentRead(BaseModel):
    id: int
    user_id: int
    item_id: int
    amount: float
    currency: str
    status: str
    order_id: str
    payment_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
