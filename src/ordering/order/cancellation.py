"""Self-service order cancellation — command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.order.queries import owned_order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class CancelOrder:
    owner_id = Identifier(required=True)
    order_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order = owned_order(command.owner_id, command.order_id)
        previous_status = order.status
        order.cancel()
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order cancelled by owner",
            order_id=str(order.id),
            owner_id=str(command.owner_id),
            previous_status=previous_status,
        )
