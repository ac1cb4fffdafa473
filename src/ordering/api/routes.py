"""FastAPI routes for the Ordering domain: cart, orders, payments and admin."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from ordering.api.auth import Principal, admin_principal, current_principal
from ordering.api.schemas import (
    AddCartItemsRequest,
    CartItemResponse,
    CartResponse,
    CreatePaymentRequest,
    OrderLineResponse,
    OrderListResponse,
    OrderResponse,
    OrderStatusValue,
    PageMeta,
    PaymentListResponse,
    PaymentResponse,
    PaymentStatusResponse,
    PlaceOrderRequest,
    SetCartItemQuantityRequest,
    StatusUpdateResponse,
    UpdateOrderStatusRequest,
    VerifyPaymentRequest,
)
from ordering.cart.cart import Cart
from ordering.cart.items import AddCartItems, RemoveCartItem, SetCartItemQuantity
from ordering.cart.management import ClearCart, OpenCart
from ordering.concurrency import order_key, owner_key, process_serialized
from ordering.order.cancellation import CancelOrder
from ordering.order.creation import PlaceOrder
from ordering.order.order import Order
from ordering.order.queries import MAX_PAGE_SIZE, list_orders, orders_for_owner, owned_order
from ordering.order.status import UpdateOrderStatus
from ordering.payment.creation import CreatePayment
from ordering.payment.payment import Payment
from ordering.payment.queries import payment_with_order, payments_for_order
from ordering.payment.verification import VerifyPayment


# ---------------------------------------------------------------------------
# Serializers
# ---------------------------------------------------------------------------
def _cart_response(cart: Cart) -> CartResponse:
    return CartResponse(
        cart_id=str(cart.id),
        owner_id=str(cart.owner_id),
        items=[
            CartItemResponse(menu_item_id=str(item.menu_item_id), quantity=item.quantity)
            for item in cart.ordered_items
        ],
        total_price=cart.total_price or 0.0,
    )


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        owner_id=str(order.owner_id),
        items=[
            OrderLineResponse(
                menu_item_id=str(line.menu_item_id),
                name=line.name,
                quantity=line.quantity,
                unit_price=line.unit_price,
            )
            for line in order.ordered_items
        ],
        total_amount=order.total_amount,
        delivery_address=order.delivery_address,
        status=order.status,
        payment_status=order.payment_status,
        created_at=order.created_at,
    )


def _payment_response(payment: Payment) -> PaymentResponse:
    return PaymentResponse(
        payment_id=str(payment.id),
        order_id=str(payment.order_id),
        method=payment.method,
        transaction_id=payment.transaction_id,
        status=payment.status,
        amount=payment.amount or 0.0,
        paid_at=payment.paid_at,
        created_at=payment.created_at,
    )


def _order_list_response(page) -> OrderListResponse:
    return OrderListResponse(
        orders=[_order_response(order) for order in page.items],
        meta=PageMeta(page=page.page, limit=page.limit, total=page.total, pages=page.pages),
    )


def _payment_status_response(principal: Principal, payment_id: str) -> PaymentStatusResponse:
    payment, order = payment_with_order(principal.id, payment_id)
    return PaymentStatusResponse(
        payment=_payment_response(payment),
        payment_status=payment.status,
        order_payment_status=order.payment_status,
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(principal: Principal = Depends(current_principal)) -> CartResponse:
    """Return the caller's cart, creating it on first access."""
    cart_id = process_serialized(owner_key(principal.id), OpenCart(owner_id=principal.id))
    return _cart_response(current_domain.repository_for(Cart).get(cart_id))


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_items(
    body: AddCartItemsRequest,
    principal: Principal = Depends(current_principal),
) -> CartResponse:
    command = AddCartItems(
        owner_id=principal.id,
        entries=json.dumps(body.entries()),
    )
    cart_id = process_serialized(owner_key(principal.id), command)
    return _cart_response(current_domain.repository_for(Cart).get(cart_id))


@cart_router.put("/items/{menu_item_id}", response_model=CartResponse)
async def set_cart_item_quantity(
    menu_item_id: str,
    body: SetCartItemQuantityRequest,
    principal: Principal = Depends(current_principal),
) -> CartResponse:
    command = SetCartItemQuantity(
        owner_id=principal.id,
        menu_item_id=menu_item_id,
        quantity=body.quantity,
    )
    cart_id = process_serialized(owner_key(principal.id), command)
    return _cart_response(current_domain.repository_for(Cart).get(cart_id))


@cart_router.delete("/items/{menu_item_id}", response_model=CartResponse)
async def remove_cart_item(menu_item_id: str, principal: Principal = Depends(current_principal)) -> CartResponse:
    command = RemoveCartItem(owner_id=principal.id, menu_item_id=menu_item_id)
    cart_id = process_serialized(owner_key(principal.id), command)
    return _cart_response(current_domain.repository_for(Cart).get(cart_id))


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(principal: Principal = Depends(current_principal)) -> CartResponse:
    cart_id = process_serialized(owner_key(principal.id), ClearCart(owner_id=principal.id))
    return _cart_response(current_domain.repository_for(Cart).get(cart_id))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(
    body: PlaceOrderRequest | None = None,
    principal: Principal = Depends(current_principal),
) -> OrderResponse:
    """Check out the caller's cart into a new order and empty the cart."""
    command = PlaceOrder(
        owner_id=principal.id,
        delivery_address=body.delivery_address if body else None,
    )
    order_id = process_serialized(owner_key(principal.id), command)
    return _order_response(current_domain.repository_for(Order).get(order_id))


@order_router.get("", response_model=OrderListResponse)
async def list_my_orders(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=MAX_PAGE_SIZE),
    principal: Principal = Depends(current_principal),
) -> OrderListResponse:
    return _order_list_response(orders_for_owner(principal.id, page=page, limit=limit))


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_my_order(order_id: str, principal: Principal = Depends(current_principal)) -> OrderResponse:
    return _order_response(owned_order(principal.id, order_id))


@order_router.put("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, principal: Principal = Depends(current_principal)) -> OrderResponse:
    command = CancelOrder(owner_id=principal.id, order_id=order_id)
    process_serialized(order_key(order_id), command)
    return _order_response(current_domain.repository_for(Order).get(order_id))


@order_router.get("/{order_id}/payments", response_model=PaymentListResponse)
async def list_order_payments(order_id: str, principal: Principal = Depends(current_principal)) -> PaymentListResponse:
    payments = payments_for_order(principal.id, order_id)
    return PaymentListResponse(payments=[_payment_response(payment) for payment in payments])


# ---------------------------------------------------------------------------
# Payment Router
# ---------------------------------------------------------------------------
payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("", status_code=201, response_model=PaymentStatusResponse)
async def create_payment(
    body: CreatePaymentRequest,
    principal: Principal = Depends(current_principal),
) -> PaymentStatusResponse:
    """Record a payment attempt; cash on delivery settles the order at once."""
    command = CreatePayment(
        owner_id=principal.id,
        order_id=body.order_id,
        method=body.method,
    )
    result = process_serialized(owner_key(principal.id), command)
    return _payment_status_response(principal, result["payment_id"])


@payment_router.post("/{payment_id}/verify", response_model=PaymentStatusResponse)
async def verify_payment(
    payment_id: str,
    body: VerifyPaymentRequest,
    principal: Principal = Depends(current_principal),
) -> PaymentStatusResponse:
    command = VerifyPayment(
        owner_id=principal.id,
        payment_id=payment_id,
        outcome=body.outcome,
        transaction_id=body.transaction_id,
    )
    process_serialized(owner_key(principal.id), command)
    return _payment_status_response(principal, payment_id)


@payment_router.get("/{payment_id}", response_model=PaymentStatusResponse)
async def get_payment_status(payment_id: str, principal: Principal = Depends(current_principal)) -> PaymentStatusResponse:
    return _payment_status_response(principal, payment_id)


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin/orders", tags=["admin"])


@admin_router.get("", response_model=OrderListResponse)
async def admin_list_orders(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=MAX_PAGE_SIZE),
    status: OrderStatusValue | None = Query(default=None),
    owner_id: str | None = None,
    principal: Principal = Depends(admin_principal),  # noqa: ARG001
) -> OrderListResponse:
    return _order_list_response(list_orders(page=page, limit=limit, status=status, owner_id=owner_id))


@admin_router.get("/{order_id}", response_model=OrderResponse)
async def admin_get_order(order_id: str, principal: Principal = Depends(admin_principal)) -> OrderResponse:  # noqa: ARG001
    return _order_response(current_domain.repository_for(Order).get(order_id))


@admin_router.put("/{order_id}/status", response_model=StatusUpdateResponse)
async def admin_update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    principal: Principal = Depends(admin_principal),
) -> StatusUpdateResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        changed_by=principal.id,
    )
    changed = process_serialized(order_key(order_id), command)
    order = current_domain.repository_for(Order).get(order_id)
    return StatusUpdateResponse(order=_order_response(order), changed=bool(changed))


__all__ = ["admin_router", "cart_router", "order_router", "payment_router"]
