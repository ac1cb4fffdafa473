import json

import pytest
from ordering.cart.items import AddCartItems
from ordering.order.creation import PlaceOrder
from protean import current_domain


def _fill_cart(owner_id="user-001", **entries):
    payload = [{"menu_item_id": item_id, "quantity": qty} for item_id, qty in entries.items()]
    return current_domain.process(
        AddCartItems(owner_id=owner_id, entries=json.dumps(payload)),
        asynchronous=False,
    )


def _place_order(owner_id="user-001", delivery_address="12 MG Road, Bengaluru"):
    return current_domain.process(
        PlaceOrder(owner_id=owner_id, delivery_address=delivery_address),
        asynchronous=False,
    )


@pytest.fixture()
def fill_cart(catalog):
    """Add ``menu_item_id=quantity`` pairs to an owner's cart; returns the cart id."""
    return _fill_cart


@pytest.fixture()
def place_order(catalog):
    """Check out an owner's cart; returns the order id."""
    return _place_order


@pytest.fixture()
def placed_order(catalog):
    """An order for two Paneer Tikka and one Masala Chai (total 250.0)."""
    _fill_cart(**{"dish-a": 2, "dish-b": 1})
    return _place_order()
