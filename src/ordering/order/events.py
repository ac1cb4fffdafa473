"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a new order with frozen prices."""

    __version__ = 1

    order_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {menu_item_id, name, quantity, unit_price}
    total_amount = Float(required=True)
    delivery_address = String(required=True, max_length=500)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled by its owner or by an administrator."""

    __version__ = 1

    order_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    previous_status = String(required=True, max_length=50)
    cancelled_by = String(required=True, max_length=50)
    cancelled_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusAdvanced:
    """An administrator moved the order one step along the delivery chain."""

    __version__ = 1

    order_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    previous_status = String(required=True, max_length=50)
    new_status = String(required=True, max_length=50)
    changed_by = Identifier()
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderPaymentStatusChanged:
    """A payment settled and changed the order's payment status."""

    __version__ = 1

    order_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    previous_payment_status = String(required=True, max_length=50)
    new_payment_status = String(required=True, max_length=50)
    changed_at = DateTime(required=True)
