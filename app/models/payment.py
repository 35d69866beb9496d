from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from app.constants.payment_status import PaymentStatus


class Payment(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="profile.id", index=True)
    item_id: int = Field(foreign_key="item.id", index=True)

    amount: float
    currency: str
    status: PaymentStatus = Field(default=PaymentStatus.pending)

    order_id: str = Field(index=True)
    payment_url: Optional[str] = None
    deposit_address: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
