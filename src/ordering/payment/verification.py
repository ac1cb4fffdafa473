"""Payment verification — settles a pending payment and its order.

Re-verifying a payment that already succeeded against a paid order is a
no-op, not an error. A failure never downgrades an order that is already
paid, whichever payment reported it.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.payment.payment import Payment, parse_outcome
from ordering.payment.queries import payment_with_order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Payment")
class VerifyPayment:
    owner_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    outcome = String(required=True, max_length=20)
    transaction_id = String(max_length=64)


@ordering.command_handler(part_of=Payment)
class VerifyPaymentHandler:
    @handle(VerifyPayment)
    def verify_payment(self, command):
        parse_outcome(command.outcome)
        payment, order = payment_with_order(command.owner_id, command.payment_id)

        if payment.is_successful and order.is_paid:
            logger.info(
                "Payment already settled",
                payment_id=str(payment.id),
                order_id=str(order.id),
            )
            return self._result(payment, order)

        changed = payment.verify(command.outcome, transaction_id=command.transaction_id)
        if changed:
            current_domain.repository_for(Payment).add(payment)

        previous_order_status = order.payment_status
        if payment.is_successful:
            order.record_payment_success(payment.id)
        elif changed:
            order.record_payment_failure(payment.id)
        if order.payment_status != previous_order_status:
            current_domain.repository_for(Order).add(order)

        logger.info(
            "Payment verified",
            payment_id=str(payment.id),
            order_id=str(order.id),
            outcome=command.outcome,
            payment_status=payment.status,
            order_payment_status=order.payment_status,
        )
        return self._result(payment, order)

    @staticmethod
    def _result(payment, order):
        return {
            "payment_id": str(payment.id),
            "order_payment_status": order.payment_status,
        }
