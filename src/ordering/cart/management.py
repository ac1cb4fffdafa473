"""Cart lifecycle — lazy creation, reads and clearing.

A cart is an implementation detail hidden from callers: reading or clearing
the cart of an owner who has none creates an empty one instead of failing.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.catalog import get_catalog
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


def find_cart(owner_id):
    """Return the owner's cart, or None if it was never created."""
    carts = current_domain.repository_for(Cart)._dao.query.filter(owner_id=str(owner_id)).all().items
    return carts[0] if carts else None


def open_cart(owner_id):
    """Return the owner's cart, creating an unsaved empty one if needed."""
    cart = find_cart(owner_id)
    if cart is None:
        cart = Cart.create(owner_id=str(owner_id))
        logger.info("Cart created", owner_id=str(owner_id), cart_id=str(cart.id))
    return cart


@ordering.command(part_of="Cart")
class OpenCart:
    """Fetch the owner's cart, creating and persisting it on first access."""

    owner_id = Identifier(required=True)


@ordering.command(part_of="Cart")
class ClearCart:
    owner_id = Identifier(required=True)


@ordering.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(OpenCart)
    def open_cart(self, command):
        cart = open_cart(command.owner_id)
        cart.reprice(get_catalog())
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = open_cart(command.owner_id)
        cart.clear()
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)
