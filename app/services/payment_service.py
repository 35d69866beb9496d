import logging
import time
from datetime import datetime
from typing import Optional
from urllib.parse import urlencode

from sqlmodel import Session, select

from app.config import settings
from app.constants.payment_status import PaymentStatus, can_transition
from app.exceptions import Conflict, NotFound, UpstreamUnavailable, ValidationFailed
from app.models.item import Item
from app.models.payment import Payment
from app.models.profile import Profile
from app.services.purchase_gate import find_completed_payment

logger = logging.getLogger(__name__)


def build_order_id(item_id: int, user_id: int) -> str:
    return f"item_{item_id}_{user_id}_{int(time.time() * 1000)}"


def build_payment_url(order_id: str, amount: float, currency: str, address: str) -> str:
    query = urlencode({
        "orderId": order_id,
        "amount": amount,
        "currency": currency,
        "address": address,
    })
    return f"{settings.PAYMENT_CHECKOUT_URL}?{query}"


def create_payment_session(
    session: Session,
    *,
    user: Profile,
    item_id: Optional[int],
    amount: Optional[float],
    currency: Optional[str],
) -> dict:
    """
    Open a pending crypto payment for `item_id`.

    Settlement is not detected here: the payment stays pending until an
    operator marks it completed after checking the deposit.
    """
    if not item_id or not amount or not currency:
        raise ValidationFailed("Missing required fields")

    item = session.get(Item, item_id)
    if not item:
        raise NotFound("Item not found")

    if item.price != amount:
        raise ValidationFailed("Amount mismatch")

    # check-then-act: no storage constraint backs this
    if find_completed_payment(session, user.id, item.id):
        raise Conflict("Item already purchased")

    if not settings.payments_configured:
        logger.error("Missing payment provider credentials")
        raise UpstreamUnavailable("Payment service unavailable")

    order_id = build_order_id(item.id, user.id)
    payment_currency = settings.PAYMENT_CURRENCY
    address = settings.PAYMENT_DEPOSIT_ADDRESS
    payment_url = build_payment_url(order_id, amount, payment_currency, address)

    payment = Payment(
        user_id=user.id,
        item_id=item.id,
        amount=amount,
        currency=payment_currency,
        status=PaymentStatus.pending,
        order_id=order_id,
        payment_url=payment_url,
        deposit_address=address,
    )
    session.add(payment)
    session.commit()
    session.refresh(payment)

    logger.info(
        f"Payment created for user {user.id}, item {item.id}, amount {amount} {currency}"
    )

    return {
        "payment_id": payment.id,
        "payment_url": payment_url,
        "order_id": order_id,
        "amount": amount,
        "currency": payment_currency,
        "deposit_address": address,
    }


def payment_status(session: Session, *, user: Profile, item_id: int) -> dict:
    if find_completed_payment(session, user.id, item_id):
        return {"item_id": item_id, "status": PaymentStatus.completed.value, "purchased": True}

    latest = session.exec(
        select(Payment)
        .where(Payment.user_id == user.id)
        .where(Payment.item_id == item_id)
        .order_by(Payment.created_at.desc(), Payment.id.desc())
    ).first()

    return {
        "item_id": item_id,
        "status": PaymentStatus(latest.status).value if latest else "none",
        "purchased": False,
    }


def list_payments(session: Session, *, user_id: Optional[int] = None, status: Optional[PaymentStatus] = None):
    query = select(Payment)
    if user_id is not None:
        query = query.where(Payment.user_id == user_id)
    if status is not None:
        query = query.where(Payment.status == status)
    return session.exec(query.order_by(Payment.created_at.desc(), Payment.id.desc())).all()


def transition_payment(session: Session, *, payment_id: int, target: PaymentStatus) -> Payment:
    """Manual settlement path: an operator confirms or rejects a pending payment."""
    payment = session.get(Payment, payment_id)
    if not payment:
        raise NotFound("Payment not found")

    if not can_transition(payment.status, target):
        raise Conflict(f"Cannot move payment from {PaymentStatus(payment.status).value} to {target.value}")

    # at most one completed payment per (user, item)
    if target == PaymentStatus.completed and find_completed_payment(session, payment.user_id, payment.item_id):
        raise Conflict("Item already purchased")

    payment.status = target
    payment.updated_at = datetime.utcnow()
    session.add(payment)
    session.commit()
    session.refresh(payment)

    logger.info("Payment %s marked %s", payment.id, target.value)
    return payment
