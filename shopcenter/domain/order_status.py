# shopcenter/domain/order_status.py
from shopcenter.domain.errors import InvalidStatusTransition

PENDING = "pending"
PROCESSING = "processing"
SHIPPED = "shipped"
DELIVERED = "delivered"
CANCELLED = "cancelled"

ORDER_STATUSES = (PENDING, PROCESSING, SHIPPED, DELIVERED, CANCELLED)

PAYMENT_STATUSES = ("pending", "paid", "failed", "refunded")

# forward-only lifecycle, cancellation from anything not yet delivered
TRANSITIONS = {
    PENDING: {PROCESSING, SHIPPED, DELIVERED, CANCELLED},
    PROCESSING: {SHIPPED, DELIVERED, CANCELLED},
    SHIPPED: {DELIVERED, CANCELLED},
    DELIVERED: set(),
    CANCELLED: set(),
}


def can_transition(current: str, requested: str) -> bool:
    if requested not in TRANSITIONS:
        return False
    if current == requested:
        return True
    return requested in TRANSITIONS.get(current, set())


def check_transition(current: str, requested: str) -> None:
    if not can_transition(current, requested):
        raise InvalidStatusTransition(current, requested)
