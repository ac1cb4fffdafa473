"""Cart aggregate (CQRS) — the owner's live draft of what they intend to order.

There is exactly one cart per owner. It is created lazily on first access,
mutated item by item, and emptied (never deleted) when an order is placed.

The cart total is never a snapshot: ``total_price`` is recomputed from the
live menu catalog on every mutation and every read, so a menu price edit is
visible on the next read without the cart itself changing. Prices are only
frozen when the cart is checked out into an Order.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer

from ordering.cart.events import CartCleared, CartItemQuantitySet, CartItemRemoved, CartItemsAdded
from ordering.domain import ordering
from ordering.errors import MenuItemsNotFound


def validate_quantity(quantity, field_name="quantity"):
    """Reject anything that is not a positive integer (booleans included)."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError({field_name: ["Quantity must be a positive integer"]})


@ordering.entity(part_of="Cart")
class CartItem:
    menu_item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    position = Integer(default=0)  # Insertion order within the cart
    added_at = DateTime()


@ordering.aggregate
class Cart:
    owner_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    total_price = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_price_cannot_be_negative(self):
        if self.total_price is not None and self.total_price < 0:
            raise ValidationError({"total_price": ["Cart total cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, owner_id):
        now = datetime.now(UTC)
        return cls(
            owner_id=owner_id,
            total_price=0.0,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def ordered_items(self):
        """Cart lines in the order they were first added."""
        return sorted(self.items, key=lambda item: item.position or 0)

    @property
    def is_empty(self):
        return not self.items

    def find_item(self, menu_item_id):
        return next((i for i in self.items if str(i.menu_item_id) == str(menu_item_id)), None)

    def _require_item(self, menu_item_id):
        item = self.find_item(menu_item_id)
        if item is None:
            raise ObjectNotFoundError({"menu_item_id": [f"Item {menu_item_id} is not in the cart"]})
        return item

    def _next_position(self):
        return max((item.position or 0 for item in self.items), default=0) + 1

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    def reprice(self, catalog):
        """Recompute ``total_price`` from current catalog prices.

        Lines whose menu item has disappeared from the catalog stay in the
        cart but contribute nothing to the total.
        """
        item_ids = list(dict.fromkeys(str(item.menu_item_id) for item in self.items))
        prices = catalog.prices_for(item_ids) if item_ids else {}
        total = sum(prices.get(str(item.menu_item_id), 0.0) * item.quantity for item in self.items)
        self.total_price = round(total, 2)
        return self.total_price

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_menu_items(self, entries, catalog):
        """Add a batch of ``{menu_item_id, quantity}`` entries.

        Every entry is validated and every distinct id is looked up in one
        catalog call before anything changes; missing ids are reported
        together. Entries for an id already in the cart (or repeated in the
        batch) add to the existing line.
        """
        if not entries:
            raise ValidationError({"items": ["At least one item is required"]})

        for entry in entries:
            if not entry.get("menu_item_id"):
                raise ValidationError({"menu_item_id": ["Menu item id is required"]})
            validate_quantity(entry.get("quantity"))

        requested = list(dict.fromkeys(str(entry["menu_item_id"]) for entry in entries))
        found = {item.id for item in catalog.find_many_by_id(requested)}
        missing = [item_id for item_id in requested if item_id not in found]
        if missing:
            raise MenuItemsNotFound(missing)

        now = datetime.now(UTC)
        for entry in entries:
            existing = self.find_item(entry["menu_item_id"])
            if existing:
                existing.quantity += entry["quantity"]
            else:
                self.add_items(
                    CartItem(
                        menu_item_id=str(entry["menu_item_id"]),
                        quantity=entry["quantity"],
                        position=self._next_position(),
                        added_at=now,
                    )
                )

        self.reprice(catalog)
        self.updated_at = now

        self.raise_(
            CartItemsAdded(
                cart_id=str(self.id),
                owner_id=str(self.owner_id),
                items=json.dumps(
                    [{"menu_item_id": str(e["menu_item_id"]), "quantity": e["quantity"]} for e in entries]
                ),
                total_price=self.total_price,
            )
        )

    def set_item_quantity(self, menu_item_id, quantity, catalog):
        """Replace the quantity of a line already in the cart."""
        validate_quantity(quantity)
        item = self._require_item(menu_item_id)

        previous_quantity = item.quantity
        item.quantity = quantity
        self.reprice(catalog)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemQuantitySet(
                cart_id=str(self.id),
                owner_id=str(self.owner_id),
                menu_item_id=str(menu_item_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
                total_price=self.total_price,
            )
        )

    def remove_menu_item(self, menu_item_id, catalog):
        item = self._require_item(menu_item_id)

        self.remove_items(item)
        self.reprice(catalog)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                owner_id=str(self.owner_id),
                menu_item_id=str(menu_item_id),
                total_price=self.total_price,
            )
        )

    def clear(self, order_id=None):
        """Empty the cart. Clearing an empty cart changes nothing."""
        removed = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.total_price = 0.0

        if removed == 0:
            return

        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                owner_id=str(self.owner_id),
                items_removed=removed,
                order_id=str(order_id) if order_id else None,
                reason="checkout" if order_id else "cleared",
            )
        )
