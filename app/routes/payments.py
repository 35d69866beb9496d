from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import List
from app.database import get_session
from app.models.profile import Profile
from app.schemas.payment_schemas import PaymentRead, PaymentStatusResponse
from app.services.payment_service import list_payments, payment_status
from app.utils.token import get_current_user

router = APIRouter()


@router.get("/status/{item_id}", response_model=PaymentStatusResponse)
def check_payment_status(
    item_id: int,
    session: Session = Depends(get_session),
    current_user: Profile = Depends(get_current_user)
):
    # a plain re-read; settlement happens out-of-band
    return payment_status(session, user=current_user, item_id=item_id)


@router.get("/me", response_model=List[PaymentRead])
def my_payments(
    session: Session = Depends(get_session),
    current_user: Profile = Depends(get_current_user)
):
    return list_payments(session, user_id=current_user.id)
