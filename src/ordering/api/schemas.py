"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands and aggregates.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class CartEntrySchema(BaseModel):
    menu_item_id: str = Field(min_length=1)
    quantity: int = Field(ge=1, default=1)


class AddCartItemsRequest(BaseModel):
    """Either a single ``menu_item_id``/``quantity`` pair or a batch of ``items``."""

    menu_item_id: str | None = None
    quantity: int = Field(ge=1, default=1)
    items: list[CartEntrySchema] | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"menu_item_id": "menu-001", "quantity": 2},
                {
                    "items": [
                        {"menu_item_id": "menu-001", "quantity": 2},
                        {"menu_item_id": "menu-002", "quantity": 1},
                    ]
                },
            ]
        }
    }

    def entries(self) -> list[dict]:
        if self.items:
            return [entry.model_dump() for entry in self.items]
        if self.menu_item_id:
            return [{"menu_item_id": self.menu_item_id, "quantity": self.quantity}]
        return []


class SetCartItemQuantityRequest(BaseModel):
    quantity: int = Field(ge=1)


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    delivery_address: str | None = Field(default=None, max_length=500)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"delivery_address": "221B Baker Street, London"},
            ]
        }
    }


OrderStatusValue = Literal["placed", "preparing", "out_for_delivery", "delivered", "cancelled"]


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatusValue


# ---------------------------------------------------------------------------
# Payment Request Schemas
# ---------------------------------------------------------------------------
class CreatePaymentRequest(BaseModel):
    order_id: str
    method: Literal["card", "upi", "cod"]


class VerifyPaymentRequest(BaseModel):
    outcome: Literal["success", "failed"]
    transaction_id: str | None = Field(default=None, max_length=64)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartItemResponse(BaseModel):
    menu_item_id: str
    quantity: int


class CartResponse(BaseModel):
    cart_id: str
    owner_id: str
    items: list[CartItemResponse]
    total_price: float


class OrderLineResponse(BaseModel):
    menu_item_id: str
    name: str | None = None
    quantity: int
    unit_price: float


class OrderResponse(BaseModel):
    order_id: str
    owner_id: str
    items: list[OrderLineResponse]
    total_amount: float
    delivery_address: str
    status: str
    payment_status: str
    created_at: datetime | None = None


class PageMeta(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    meta: PageMeta


class StatusUpdateResponse(BaseModel):
    order: OrderResponse
    changed: bool


class PaymentResponse(BaseModel):
    payment_id: str
    order_id: str
    method: str
    transaction_id: str
    status: str
    amount: float
    paid_at: datetime | None = None
    created_at: datetime | None = None


class PaymentStatusResponse(BaseModel):
    payment: PaymentResponse
    payment_status: str
    order_payment_status: str


class PaymentListResponse(BaseModel):
    payments: list[PaymentResponse]
