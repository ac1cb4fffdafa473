"""Ordering domain API package."""

from ordering.api.routes import admin_router, cart_router, order_router, payment_router

__all__ = ["cart_router", "order_router", "payment_router", "admin_router"]
