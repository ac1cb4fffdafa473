"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.cart import Cart
from ordering.cart.events import CartCleared, CartItemQuantitySet, CartItemRemoved, CartItemsAdded
from ordering.errors import InvalidStateError
from ordering.order.events import OrderCancelled, OrderPaymentStatusChanged, OrderPlaced, OrderStatusAdvanced
from ordering.order.order import Order
from ordering.order.transitions import FORWARD_CHAIN, OrderStatus
from ordering.payment.events import PaymentCreated, PaymentVerified
from protean.exceptions import ObjectNotFoundError, ValidationError
from pytest_bdd import given, parsers, then

# Map event name strings to classes for dynamic lookup in Then steps
_EVENT_CLASSES = {
    "CartItemsAdded": CartItemsAdded,
    "CartItemQuantitySet": CartItemQuantitySet,
    "CartItemRemoved": CartItemRemoved,
    "CartCleared": CartCleared,
    "OrderPlaced": OrderPlaced,
    "OrderCancelled": OrderCancelled,
    "OrderStatusAdvanced": OrderStatusAdvanced,
    "OrderPaymentStatusChanged": OrderPaymentStatusChanged,
    "PaymentCreated": PaymentCreated,
    "PaymentVerified": PaymentVerified,
}

_ERROR_CLASSES = {
    "validation": ValidationError,
    "not found": ObjectNotFoundError,
    "invalid state": InvalidStateError,
}


@pytest.fixture()
def error():
    """Container for the exception captured by a When step."""
    return {"exc": None}


@pytest.fixture()
def menu(catalog):
    return catalog


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart():
    return Cart.create(owner_id="user-001")


@given(parsers.cfparse('the cart holds {qty:d} of "{menu_item_id}"'), target_fixture="cart")
def cart_holds(cart, menu, qty, menu_item_id):
    cart.add_menu_items([{"menu_item_id": menu_item_id, "quantity": qty}], menu)
    cart._events.clear()
    return cart


@given("an order was placed", target_fixture="order")
def placed_order(menu):
    cart = Cart.create(owner_id="user-001")
    cart.add_menu_items(
        [{"menu_item_id": "dish-a", "quantity": 2}, {"menu_item_id": "dish-b", "quantity": 1}],
        menu,
    )
    order = Order.place("user-001", cart.ordered_items, "12 MG Road, Bengaluru", menu)
    order._events.clear()
    return order


@given(parsers.cfparse('the order was moved to "{status}"'), target_fixture="order")
def order_moved_to(order, status):
    target = OrderStatus(status)
    if target is OrderStatus.CANCELLED:
        order.cancel()
    else:
        for step in FORWARD_CHAIN[1 : FORWARD_CHAIN.index(target) + 1]:
            order.update_status(step.value)
    order._events.clear()
    return order


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then(parsers.cfparse('the order payment status is "{status}"'))
def order_payment_status_is(order, status):
    assert order.payment_status == status


@then(parsers.cfparse("the action fails with a {kind} error"))
@then(parsers.cfparse("the action fails with an {kind} error"))
def action_fails(error, kind):
    assert error["exc"] is not None, f"Expected a {kind} error but none was raised"
    assert isinstance(error["exc"], _ERROR_CLASSES[kind])


@then("the action succeeds")
def action_succeeds(error):
    assert error["exc"] is None, f"Unexpected error: {error['exc']!r}"


def _assert_raised(aggregate, event_type):
    event_cls = _EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in aggregate._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in aggregate._events]}"


@then(parsers.cfparse("a {event_type} cart event is raised"))
def cart_event_raised(cart, event_type):
    _assert_raised(cart, event_type)


@then(parsers.cfparse("an {event_type} order event is raised"))
@then(parsers.cfparse("a {event_type} order event is raised"))
def order_event_raised(order, event_type):
    _assert_raised(order, event_type)


@then(parsers.cfparse("a {event_type} payment event is raised"))
def payment_event_raised(payment, event_type):
    _assert_raised(payment, event_type)


@then("no event is raised")
def no_event_raised(order):
    assert order._events == []
