"""Payment creation — command and handler.

The payment and, for cash on delivery, the order it settles are written in
one Unit of Work.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.payment.payment import Payment, parse_method
from ordering.payment.queries import order_for_payment

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Payment")
class CreatePayment:
    owner_id = Identifier(required=True)
    order_id = Identifier(required=True)
    method = String(required=True, max_length=10)


@ordering.command_handler(part_of=Payment)
class CreatePaymentHandler:
    @handle(CreatePayment)
    def create_payment(self, command):
        parse_method(command.method)

        order = order_for_payment(command.owner_id, command.order_id)
        order.ensure_payable()

        payment = Payment.create(
            order_id=order.id,
            owner_id=command.owner_id,
            method=command.method,
            amount=order.total_amount,
        )
        current_domain.repository_for(Payment).add(payment)

        if payment.is_successful:
            order.record_payment_success(payment.id)
            current_domain.repository_for(Order).add(order)

        logger.info(
            "Payment created",
            payment_id=str(payment.id),
            order_id=str(order.id),
            method=payment.method,
            status=payment.status,
            order_payment_status=order.payment_status,
        )
        return {
            "payment_id": str(payment.id),
            "order_payment_status": order.payment_status,
        }
