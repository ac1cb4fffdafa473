"""Domain events for the Cart aggregate."""

from protean.fields import Float, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Cart")
class CartItemsAdded:
    """One or more menu items were added to the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {menu_item_id, quantity}
    total_price = Float(required=True)


@ordering.event(part_of="Cart")
class CartItemQuantitySet:
    """The quantity of a cart line was replaced."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    total_price = Float(required=True)


@ordering.event(part_of="Cart")
class CartItemRemoved:
    """A menu item was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    total_price = Float(required=True)


@ordering.event(part_of="Cart")
class CartCleared:
    """All lines were removed, either by the owner or by checkout."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    items_removed = Integer(required=True)
    order_id = Identifier()  # Set when the cart was emptied by checkout
    reason = String(max_length=50)
