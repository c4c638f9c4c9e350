"""FastAPI routes for the Ordering domain — cart, checkout and orders."""

import structlog
from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from identity.api.deps import admin_user, current_user
from identity.session import Identity
from notifications.service import NotificationService
from ordering.api.schemas import (
    AddCartItemRequest,
    CartLineResponse,
    CartResponse,
    CheckoutResponse,
    CheckoutResultResponse,
    OrderLineResponse,
    OrderListResponse,
    OrderResponse,
    SubmitCheckoutRequest,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
)
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from ordering.cart.management import find_cart
from ordering.cart.pricing import format_money
from ordering.checkout.checkout import Checkout
from ordering.checkout.orchestrator import CheckoutOrchestrator
from ordering.domain import ordering
from shared.store import get_document_store
from shared.store.records import OrderRecord

logger = structlog.get_logger(__name__)

cart_router = APIRouter(prefix="/cart", tags=["cart"])
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


def get_orchestrator() -> CheckoutOrchestrator:
    return CheckoutOrchestrator(get_document_store(), NotificationService())


def _cart_response(customer_id: str) -> CartResponse:
    cart = find_cart(customer_id)
    if cart is None:
        return CartResponse(formatted_total=format_money(0))
    return CartResponse(
        cart_id=str(cart.id),
        items=[
            CartLineResponse(
                product_id=str(item.product_id),
                name=item.name,
                unit_price=item.unit_price,
                list_price=item.list_price,
                discount=item.discount or 0.0,
                quantity=item.quantity,
                line_total=item.line_total,
            )
            for item in cart.items
        ],
        item_count=cart.item_count,
        total=cart.get_total(),
        formatted_total=format_money(cart.get_total()),
    )


def _checkout_response(checkout: Checkout, saved_address: dict | None = None) -> CheckoutResponse:
    return CheckoutResponse(
        checkout_id=str(checkout.id),
        stage=checkout.stage,
        order_id=str(checkout.order_id) if checkout.order_id else None,
        failed_stage=checkout.failed_stage,
        failure_reason=checkout.failure_reason,
        attempts=checkout.attempts or 0,
        warnings=checkout.warning_list,
        saved_address=saved_address,
    )


def _order_response(order: OrderRecord) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        status=order.status.value,
        total=order.total,
        formatted_total=format_money(order.total),
        items=[
            OrderLineResponse(
                product_id=line.product_id,
                name=line.name,
                unit_price=line.unit_price,
                quantity=line.quantity,
            )
            for line in order.items
        ],
        customer=order.customer.model_dump(),
        address=order.address.model_dump(),
        payment_method=order.payment_method.value,
        created_at=order.created_at,
    )


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.get("", response_model=CartResponse)
async def get_cart(identity: Identity = Depends(current_user)) -> CartResponse:
    return _cart_response(identity.user_id)


@cart_router.post("/items", status_code=201, response_model=CartResponse)
def add_cart_item(body: AddCartItemRequest, identity: Identity = Depends(current_user)) -> CartResponse:
    with ordering.domain_context():
        product = get_document_store().get_product(body.product_id)
        if product is None or not product.is_active:
            raise ObjectNotFoundError(f"Product with id {body.product_id} does not exist")

        command = AddToCart(
            customer_id=identity.user_id,
            product_id=product.id,
            name=product.name,
            price=product.price,
            discount=product.discount,
            quantity=body.quantity,
        )
        current_domain.process(command, asynchronous=False)
        return _cart_response(identity.user_id)


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str, body: UpdateCartItemRequest, identity: Identity = Depends(current_user)
) -> CartResponse:
    command = UpdateCartQuantity(customer_id=identity.user_id, product_id=product_id, new_quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_response(identity.user_id)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, identity: Identity = Depends(current_user)) -> CartResponse:
    current_domain.process(RemoveFromCart(customer_id=identity.user_id, product_id=product_id), asynchronous=False)
    return _cart_response(identity.user_id)


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
@checkout_router.post("", status_code=201, response_model=CheckoutResponse)
def begin_checkout(
    identity: Identity = Depends(current_user),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
) -> CheckoutResponse:
    with ordering.domain_context():
        checkout = orchestrator.begin(identity)
        return _checkout_response(checkout, saved_address=orchestrator.saved_address(identity))


@checkout_router.get("/{checkout_id}", response_model=CheckoutResponse)
def get_checkout(
    checkout_id: str,
    identity: Identity = Depends(current_user),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
) -> CheckoutResponse:
    with ordering.domain_context():
        checkout = orchestrator.get(checkout_id, identity)
        saved_address = checkout.address_data or orchestrator.saved_address(identity)
        return _checkout_response(checkout, saved_address=saved_address)


@checkout_router.post("/{checkout_id}/submit", response_model=CheckoutResultResponse)
def submit_checkout(
    checkout_id: str,
    body: SubmitCheckoutRequest,
    identity: Identity = Depends(current_user),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
) -> CheckoutResultResponse:
    with ordering.domain_context():
        result = orchestrator.submit(
            checkout_id,
            identity,
            address=body.address,
            payment_method=body.payment_method,
            phone=body.phone,
        )
        return CheckoutResultResponse(
            checkout_id=result.checkout_id,
            stage=result.stage,
            order_id=result.order_id,
            total=result.total,
            formatted_total=format_money(result.total),
            warnings=list(result.warnings),
        )


@checkout_router.post("/{checkout_id}/abandon", response_model=CheckoutResponse)
def abandon_checkout(
    checkout_id: str,
    identity: Identity = Depends(current_user),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
) -> CheckoutResponse:
    with ordering.domain_context():
        return _checkout_response(orchestrator.abandon(checkout_id, identity))


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.get("/mine", response_model=OrderListResponse)
def my_orders(identity: Identity = Depends(current_user)) -> OrderListResponse:
    orders = [_order_response(o) for o in get_document_store().list_orders(customer_id=identity.user_id)]
    return OrderListResponse(orders=orders, count=len(orders))


@order_router.get("", response_model=OrderListResponse)
def all_orders(admin: Identity = Depends(admin_user)) -> OrderListResponse:
    orders = [_order_response(o) for o in get_document_store().list_orders()]
    return OrderListResponse(orders=orders, count=len(orders))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, admin: Identity = Depends(admin_user)
) -> OrderResponse:
    order = get_document_store().update_order_status(order_id, body.status)
    logger.info("Order status updated", order_id=order_id, status=body.status.value, changed_by=admin.user_id)
    return _order_response(order)
