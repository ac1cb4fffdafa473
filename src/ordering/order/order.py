"""Order aggregate (CQRS) — the frozen financial record produced at checkout.

An order is created exactly once from a non-empty cart. Each cart line is
snapshotted with the menu price current at that moment, and ``total_amount``
is fixed from those snapshots: later catalog edits never touch an order.

After creation only two things move, independently of each other:

- ``status``, the delivery lifecycle (see ``ordering.order.transitions``),
  changed by owner cancellation or by administrators one step at a time;
- ``payment_status``, changed by payments settling against the order.
  ``paid`` is sticky: a failure reported after a success never downgrades it.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.domain import ordering
from ordering.errors import InvalidStateError, MenuItemsNotFound
from ordering.order.events import OrderCancelled, OrderPaymentStatusChanged, OrderPlaced, OrderStatusAdvanced
from ordering.order.transitions import OrderStatus, assert_not_terminal, check_admin_transition


class OrderPaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class CancellationActor(Enum):
    OWNER = "owner"
    ADMIN = "admin"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLine:
    """A cart line frozen at checkout; ``unit_price`` is the price snapshot."""

    menu_item_id = Identifier(required=True)
    name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    position = Integer(default=0)

    @property
    def line_total(self):
        return round(self.unit_price * self.quantity, 2)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    owner_id = Identifier(required=True)
    items = HasMany(OrderLine)
    total_amount = Float(required=True, min_value=0.0)
    delivery_address = String(required=True, max_length=500)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PLACED.value,
    )
    payment_status = String(
        choices=OrderPaymentStatus,
        default=OrderPaymentStatus.PENDING.value,
    )
    cancelled_by = String(max_length=50)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, owner_id, cart_items, delivery_address, catalog):
        """Snapshot ``cart_items`` at current catalog prices into a new order.

        Args:
            owner_id: The owner of the cart being checked out.
            cart_items: Cart lines in insertion order (menu_item_id, quantity).
            delivery_address: Already resolved, non-blank address.
            catalog: The menu catalog to price the lines from.
        """
        if not cart_items:
            raise InvalidStateError({"cart": ["Cart is empty"]})
        if not delivery_address or not delivery_address.strip():
            raise ValidationError({"delivery_address": ["Delivery address is required"]})

        item_ids = list(dict.fromkeys(str(item.menu_item_id) for item in cart_items))
        menu = {menu_item.id: menu_item for menu_item in catalog.find_many_by_id(item_ids)}
        missing = [item_id for item_id in item_ids if item_id not in menu]
        if missing:
            raise MenuItemsNotFound(missing)

        lines = [
            OrderLine(
                menu_item_id=str(item.menu_item_id),
                name=menu[str(item.menu_item_id)].name,
                quantity=item.quantity,
                unit_price=menu[str(item.menu_item_id)].price,
                position=position,
            )
            for position, item in enumerate(cart_items, start=1)
        ]

        total_amount = round(sum(line.unit_price * line.quantity for line in lines), 2)
        if total_amount <= 0:
            raise InvalidStateError({"total_amount": ["Order total must be greater than zero"]})

        now = datetime.now(UTC)
        order = cls(
            owner_id=str(owner_id),
            total_amount=total_amount,
            delivery_address=delivery_address.strip(),
            status=OrderStatus.PLACED.value,
            payment_status=OrderPaymentStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for line in lines:
            order.add_items(line)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                owner_id=str(owner_id),
                items=json.dumps(
                    [
                        {
                            "menu_item_id": line.menu_item_id,
                            "name": line.name,
                            "quantity": line.quantity,
                            "unit_price": line.unit_price,
                        }
                        for line in lines
                    ]
                ),
                total_amount=total_amount,
                delivery_address=order.delivery_address,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def ordered_items(self):
        return sorted(self.items, key=lambda line: line.position or 0)

    def is_owned_by(self, owner_id):
        return str(self.owner_id) == str(owner_id)

    @property
    def is_paid(self):
        return self.payment_status == OrderPaymentStatus.PAID.value

    # -------------------------------------------------------------------
    # Delivery lifecycle
    # -------------------------------------------------------------------
    def cancel(self, cancelled_by=CancellationActor.OWNER.value):
        """Cancel from any non-terminal status, without the one-step rule."""
        current = OrderStatus(self.status)
        assert_not_terminal(current)

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_by = cancelled_by
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                owner_id=str(self.owner_id),
                previous_status=current.value,
                cancelled_by=cancelled_by,
                cancelled_at=now,
            )
        )

    def update_status(self, target, changed_by=None):
        """Apply an administrative status change.

        Returns False when ``target`` equals the current status; nothing is
        changed in that case.
        """
        try:
            target_status = OrderStatus(target)
        except ValueError:
            allowed = ", ".join(status.value for status in OrderStatus)
            raise ValidationError({"status": [f"Status must be one of {allowed}"]}) from None

        current = OrderStatus(self.status)
        if not check_admin_transition(current, target_status):
            return False

        if target_status is OrderStatus.CANCELLED:
            self.cancel(cancelled_by=CancellationActor.ADMIN.value)
            return True

        now = datetime.now(UTC)
        self.status = target_status.value
        self.updated_at = now

        self.raise_(
            OrderStatusAdvanced(
                order_id=str(self.id),
                owner_id=str(self.owner_id),
                previous_status=current.value,
                new_status=target_status.value,
                changed_by=str(changed_by) if changed_by else None,
                changed_at=now,
            )
        )
        return True

    # -------------------------------------------------------------------
    # Payment settlement
    # -------------------------------------------------------------------
    def ensure_payable(self):
        if self.is_paid:
            raise InvalidStateError({"payment_status": ["Order is already paid"]})

    def record_payment_success(self, payment_id):
        self._change_payment_status(OrderPaymentStatus.PAID, payment_id)

    def record_payment_failure(self, payment_id):
        """Mark the order failed unless it is already paid."""
        if self.is_paid:
            return
        self._change_payment_status(OrderPaymentStatus.FAILED, payment_id)

    def _change_payment_status(self, new_status, payment_id):
        previous = self.payment_status
        if previous == new_status.value:
            return

        now = datetime.now(UTC)
        self.payment_status = new_status.value
        self.updated_at = now

        self.raise_(
            OrderPaymentStatusChanged(
                order_id=str(self.id),
                owner_id=str(self.owner_id),
                payment_id=str(payment_id),
                previous_payment_status=previous,
                new_payment_status=new_status.value,
                changed_at=now,
            )
        )
