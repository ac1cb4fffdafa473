import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import admin_router, cart_router, order_router, payment_router
from ordering.api.errors import install_error_handlers

USER = {"X-User-Id": "user-001"}


@pytest.fixture()
def client(catalog):
    app = FastAPI()
    install_error_handlers(app)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(payment_router)
    app.include_router(admin_router)
    return TestClient(app)


@pytest.fixture()
def checkout(client):
    """Fill the caller's cart and place an order; returns the order body."""

    def _checkout(items=None, headers=USER, delivery_address="12 MG Road, Bengaluru"):
        items = items or [{"menu_item_id": "dish-a", "quantity": 2}, {"menu_item_id": "dish-b", "quantity": 1}]
        response = client.post("/cart/items", json={"items": items}, headers=headers)
        assert response.status_code == 200
        response = client.post("/orders", json={"delivery_address": delivery_address}, headers=headers)
        assert response.status_code == 201
        return response.json()

    return _checkout
