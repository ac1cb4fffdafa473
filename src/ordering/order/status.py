"""Order Status Controller — the administrative path for delivery status.

Administrators move an order one step along
``placed → preparing → out_for_delivery → delivered`` or cancel it while it
is not yet terminal. Repeating the current status succeeds without writing.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)
    changed_by = Identifier()


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous_status = order.status

        changed = order.update_status(command.status, changed_by=command.changed_by)
        if not changed:
            logger.info("Order status unchanged", order_id=str(order.id), status=order.status)
            return False

        repo.add(order)
        logger.info(
            "Order status updated",
            order_id=str(order.id),
            previous_status=previous_status,
            new_status=order.status,
            changed_by=command.changed_by,
        )
        return True
