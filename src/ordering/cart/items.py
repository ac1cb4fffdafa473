"""Cart item management — commands and handler."""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.cart.management import find_cart, open_cart
from ordering.catalog import get_catalog
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Cart")
class AddCartItems:
    owner_id = Identifier(required=True)
    entries = Text(required=True)  # JSON: list of {menu_item_id, quantity}


@ordering.command(part_of="Cart")
class SetCartItemQuantity:
    owner_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="Cart")
class RemoveCartItem:
    owner_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)


def _existing_cart(owner_id):
    cart = find_cart(owner_id)
    if cart is None:
        raise ObjectNotFoundError({"cart": ["Cart not found"]})
    return cart


@ordering.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddCartItems)
    def add_cart_items(self, command):
        entries = json.loads(command.entries) if isinstance(command.entries, str) else command.entries

        cart = open_cart(command.owner_id)
        cart.add_menu_items(entries, catalog=get_catalog())
        current_domain.repository_for(Cart).add(cart)

        logger.info(
            "Items added to cart",
            cart_id=str(cart.id),
            owner_id=str(command.owner_id),
            entries=len(entries),
            total_price=cart.total_price,
        )
        return str(cart.id)

    @handle(SetCartItemQuantity)
    def set_cart_item_quantity(self, command):
        cart = _existing_cart(command.owner_id)
        cart.set_item_quantity(
            menu_item_id=command.menu_item_id,
            quantity=command.quantity,
            catalog=get_catalog(),
        )
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        cart = _existing_cart(command.owner_id)
        cart.remove_menu_item(command.menu_item_id, catalog=get_catalog())
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)
