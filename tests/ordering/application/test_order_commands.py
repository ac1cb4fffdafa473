"""Application tests for owner cancellation and administrative status updates."""

import pytest
from ordering.errors import InvalidStateError
from ordering.order.cancellation import CancelOrder
from ordering.order.order import Order
from ordering.order.queries import list_orders, orders_for_owner, owned_order
from ordering.order.status import UpdateOrderStatus
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError



def _update(order_id, status):
    return current_domain.process(
        UpdateOrderStatus(order_id=order_id, status=status, changed_by="admin-001"),
        asynchronous=False,
    )


def _order(order_id):
    return current_domain.repository_for(Order).get(order_id)


class TestCancelOrder:
    def test_owner_cancels(self, placed_order):
        current_domain.process(CancelOrder(owner_id="user-001", order_id=placed_order), asynchronous=False)
        order = _order(placed_order)
        assert order.status == "cancelled"
        assert order.cancelled_by == "owner"

    def test_owner_cancels_out_for_delivery(self, placed_order):
        _update(placed_order, "preparing")
        _update(placed_order, "out_for_delivery")
        current_domain.process(CancelOrder(owner_id="user-001", order_id=placed_order), asynchronous=False)
        assert _order(placed_order).status == "cancelled"

    def test_cannot_cancel_delivered(self, placed_order):
        for status in ("preparing", "out_for_delivery", "delivered"):
            _update(placed_order, status)
        with pytest.raises(InvalidStateError):
            current_domain.process(CancelOrder(owner_id="user-001", order_id=placed_order), asynchronous=False)
        assert _order(placed_order).status == "delivered"

    def test_cannot_cancel_twice(self, placed_order):
        current_domain.process(CancelOrder(owner_id="user-001", order_id=placed_order), asynchronous=False)
        with pytest.raises(InvalidStateError):
            current_domain.process(CancelOrder(owner_id="user-001", order_id=placed_order), asynchronous=False)

    def test_foreign_order_is_not_found(self, placed_order):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(CancelOrder(owner_id="user-999", order_id=placed_order), asynchronous=False)
        assert _order(placed_order).status == "placed"


class TestUpdateOrderStatus:
    def test_advance_through_chain(self, placed_order):
        for status in ("preparing", "out_for_delivery", "delivered"):
            assert _update(placed_order, status) is True
            assert _order(placed_order).status == status

    def test_same_status_is_success_without_change(self, placed_order):
        assert _update(placed_order, "placed") is False
        assert _order(placed_order).status == "placed"

    def test_skip_rejected(self, placed_order):
        with pytest.raises(InvalidStateError):
            _update(placed_order, "delivered")
        assert _order(placed_order).status == "placed"

    def test_backwards_rejected(self, placed_order):
        _update(placed_order, "preparing")
        with pytest.raises(InvalidStateError):
            _update(placed_order, "placed")

    def test_admin_cancel(self, placed_order):
        _update(placed_order, "preparing")
        assert _update(placed_order, "cancelled") is True
        order = _order(placed_order)
        assert order.status == "cancelled"
        assert order.cancelled_by == "admin"

    def test_terminal_order_rejects_every_update(self, placed_order):
        _update(placed_order, "cancelled")
        for status in ("placed", "preparing", "cancelled"):
            with pytest.raises(InvalidStateError):
                _update(placed_order, status)

    def test_unknown_status(self, placed_order):
        with pytest.raises(ValidationError):
            _update(placed_order, "teleported")

    def test_unknown_order(self, catalog):
        with pytest.raises(ObjectNotFoundError):
            _update("no-such-order", "preparing")


class TestOrderQueries:
    def test_owned_order(self, placed_order):
        assert owned_order("user-001", placed_order).id == placed_order

    def test_owned_order_hides_foreign(self, placed_order):
        with pytest.raises(ObjectNotFoundError):
            owned_order("user-002", placed_order)

    def test_orders_for_owner_only_lists_own(self, catalog, fill_cart, place_order):
        fill_cart(owner_id="user-001", **{"dish-a": 1})
        mine = place_order(owner_id="user-001")
        fill_cart(owner_id="user-002", **{"dish-b": 1})
        place_order(owner_id="user-002")

        page = orders_for_owner("user-001")
        assert [order.id for order in page.items] == [mine]
        assert page.total == 1

    def test_pagination(self, catalog, fill_cart, place_order):
        for _ in range(5):
            fill_cart(**{"dish-c": 1})
            place_order()

        page = orders_for_owner("user-001", page=2, limit=2)
        assert len(page.items) == 2
        assert page.total == 5
        assert page.pages == 3

    def test_list_orders_filters_by_status(self, catalog, fill_cart, place_order):
        fill_cart(**{"dish-a": 1})
        first = place_order()
        fill_cart(**{"dish-a": 1})
        place_order()
        _update(first, "preparing")

        page = list_orders(status="preparing")
        assert [order.id for order in page.items] == [first]

    def test_empty_listing_has_one_page(self, catalog):
        page = list_orders()
        assert page.items == []
        assert page.pages == 1
