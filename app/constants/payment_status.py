from enum import Enum


class PaymentStatus(str, Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"


ALLOWED_TRANSITIONS = {
    PaymentStatus.pending: [PaymentStatus.completed, PaymentStatus.failed],
    PaymentStatus.failed: [],
    PaymentStatus.completed: [],
}


def can_transition(current: PaymentStatus, target: PaymentStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(PaymentStatus(current), [])
