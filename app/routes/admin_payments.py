from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from typing import List, Optional
from app.constants.payment_status import PaymentStatus
from app.database import get_session
from app.dependencies.admin import require_admin
from app.schemas.payment_schemas import PaymentRead
from app.services.payment_service import list_payments, transition_payment

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=List[PaymentRead])
def admin_list_payments(
    status: Optional[PaymentStatus] = Query(None),
    session: Session = Depends(get_session),
):
    return list_payments(session, status=status)


@router.post("/{payment_id}/complete", response_model=PaymentRead)
def complete_payment(payment_id: int, session: Session = Depends(get_session)):
    """Record that the deposit for this order was verified by hand."""
    return transition_payment(session, payment_id=payment_id, target=PaymentStatus.completed)


@router.post("/{payment_id}/fail", response_model=PaymentRead)
def fail_payment(payment_id: int, session: Session = Depends(get_session)):
    return transition_payment(session, payment_id=payment_id, target=PaymentStatus.failed)
