import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.constants.payment_status import PaymentStatus
from app.exceptions import InternalError
from app.models.item import Item
from app.models.payment import Payment
from app.models.profile import Profile

logger = logging.getLogger(__name__)


class PurchaseDecision(str, Enum):
    allowed = "allowed"
    denied = "denied"


@dataclass
class GateResult:
    decision: PurchaseDecision
    reason: str

    @property
    def allowed(self) -> bool:
        return self.decision == PurchaseDecision.allowed


def find_completed_payment(session: Session, user_id: int, item_id: int) -> Optional[Payment]:
    return session.exec(
        select(Payment)
        .where(Payment.user_id == user_id)
        .where(Payment.item_id == item_id)
        .where(Payment.status == PaymentStatus.completed)
    ).first()


def check_purchase(session: Session, user: Optional[Profile], item: Item) -> GateResult:
    """
    Decide whether `user` may obtain `item`'s file.

    Every download needs a signed-in identity, free items included. Priced
    items additionally need a completed payment for this exact pair.
    """
    if user is None:
        return GateResult(PurchaseDecision.denied, "authentication_required")

    if item.is_free:
        return GateResult(PurchaseDecision.allowed, "free")

    try:
        payment = find_completed_payment(session, user.id, item.id)
    except SQLAlchemyError as e:
        logger.error("Purchase lookup failed for user %s item %s: %s", user.id, item.id, e)
        raise InternalError("Unable to verify purchase") from e

    if payment:
        return GateResult(PurchaseDecision.allowed, "purchased")

    return GateResult(PurchaseDecision.denied, "payment_required")
