"""Order placement — checkout of the owner's cart into a new Order.

The new order and the emptied cart are written in the same Unit of Work:
either both are persisted or neither is.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.cart.management import find_cart
from ordering.catalog import get_catalog
from ordering.domain import ordering
from ordering.errors import InvalidStateError
from ordering.order.order import Order
from ordering.profiles import get_profiles

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    owner_id = Identifier(required=True)
    delivery_address = String(max_length=500)  # Falls back to the profile address


def resolve_delivery_address(owner_id, explicit_address, profiles):
    """Prefer a non-blank explicit address, else the saved profile address."""
    if explicit_address and explicit_address.strip():
        return explicit_address.strip()
    saved = profiles.get_address(str(owner_id))
    if saved and saved.strip():
        return saved.strip()
    return None


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart = find_cart(command.owner_id)
        if cart is None or cart.is_empty:
            raise InvalidStateError({"cart": ["Cart is empty"]})

        address = resolve_delivery_address(command.owner_id, command.delivery_address, get_profiles())

        order = Order.place(
            owner_id=command.owner_id,
            cart_items=cart.ordered_items,
            delivery_address=address,
            catalog=get_catalog(),
        )
        cart.clear(order_id=order.id)

        current_domain.repository_for(Order).add(order)
        current_domain.repository_for(Cart).add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            owner_id=str(command.owner_id),
            lines=len(order.items),
            total_amount=order.total_amount,
        )
        return str(order.id)
