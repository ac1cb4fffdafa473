"""Read helpers for payments, scoped to the owner of the paid order."""

from protean.utils.globals import current_domain

from ordering.errors import ForbiddenError
from ordering.order.order import Order
from ordering.order.queries import owned_order
from ordering.payment.payment import Payment


def order_for_payment(owner_id, order_id) -> Order:
    """Load an order for a payment operation.

    Unlike the order endpoints, a foreign order is reported as forbidden
    rather than hidden.
    """
    order = current_domain.repository_for(Order).get(order_id)
    if not order.is_owned_by(owner_id):
        raise ForbiddenError({"order": ["Order does not belong to you"]})
    return order


def payment_with_order(owner_id, payment_id) -> tuple[Payment, Order]:
    payment = current_domain.repository_for(Payment).get(payment_id)
    order = order_for_payment(owner_id, payment.order_id)
    return payment, order


def payments_for_order(owner_id, order_id) -> list[Payment]:
    """Every payment attempt against one of the owner's orders, oldest first."""
    owned_order(owner_id, order_id)
    return (
        current_domain.repository_for(Payment)
        ._dao.query.filter(order_id=str(order_id))
        .order_by("created_at")
        .all()
        .items
    )
