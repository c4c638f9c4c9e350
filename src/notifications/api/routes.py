"""FastAPI routes for storefront notifications.

Thin adapters over the Notification Service: validate the page payload,
build the records the service expects, and translate the dispatch result
into a ``{message}`` response.
"""

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PayloadError

from notifications.api.schemas import (
    CartNotifyRequest,
    ContactRequest,
    MessageResponse,
    NewsletterRequest,
    NotifyCustomer,
    NotifyLine,
    NotifyOrder,
    OrderNotifyRequest,
)
from notifications.service import NotificationService
from ordering.cart.pricing import cart_total
from shared.store.records import (
    AddressRecord,
    CustomerContact,
    LineItem,
    OrderRecord,
    OrderStatus,
    PaymentMethod,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["notifications"])


def _message(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    content = {"message": message}
    if error:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


def _contact(customer: NotifyCustomer) -> CustomerContact:
    return CustomerContact(
        identity_id=customer.user_id or customer.email,
        email=customer.email,
        full_name=customer.name,
        phone=customer.phone,
    )


def _lines(lines: list[NotifyLine]) -> tuple[LineItem, ...]:
    return tuple(
        LineItem(product_id=line.product_id, name=line.name, unit_price=line.price, quantity=line.quantity)
        for line in lines
    )


# ---------------------------------------------------------------------------
# Orders & cart
# ---------------------------------------------------------------------------
@router.post("/orders/notify", response_model=MessageResponse)
def notify_order(body: OrderNotifyRequest):
    try:
        order = NotifyOrder.model_validate(body.order or {})
        customer = NotifyCustomer.model_validate(body.customer or {})
        lines = _lines(order.items)
        record = OrderRecord(
            id=order.id,
            items=lines,
            total=cart_total(lines),
            status=OrderStatus(order.status),
            customer=_contact(customer),
            address=AddressRecord(**order.address.model_dump()),
            payment_method=PaymentMethod(order.payment_method),
            created_at=order.created_at or datetime.now(UTC),
        )
    except (PayloadError, ValueError) as exc:
        logger.warning("Order notification rejected", error=str(exc))
        return _message(400, "Order and customer information are required")

    service = NotificationService()
    alert = service.send_order_alert(record)
    confirmation = service.send_order_confirmation(record)
    if not (alert.ok and confirmation.ok):
        return _message(500, "Failed to send order notification", error=alert.error or confirmation.error)
    return MessageResponse(message="Order notification sent successfully")


@router.post("/cart/notify", response_model=MessageResponse)
def notify_cart(body: CartNotifyRequest):
    try:
        if not body.cart or not body.total:
            raise ValueError("cart and total are required")
        lines = _lines([NotifyLine.model_validate(line) for line in body.cart])
        customer = _contact(NotifyCustomer.model_validate(body.customer or {}))
    except (PayloadError, ValueError) as exc:
        logger.warning("Cart notification rejected", error=str(exc))
        return _message(400, "Cart, customer, and total information are required")

    result = NotificationService().send_cart_reminder(lines, customer, body.total)
    if not result.ok:
        return _message(500, "Failed to send cart notification email", error=result.error)
    return MessageResponse(message="Cart checkout notification sent successfully")


# ---------------------------------------------------------------------------
# Newsletter & contact
# ---------------------------------------------------------------------------
@router.post("/newsletter", response_model=MessageResponse)
def subscribe_newsletter(body: NewsletterRequest):
    email = (body.email or "").strip()
    if "@" not in email:
        return _message(400, "Please provide a valid email address")

    result = NotificationService().send_newsletter_welcome(email)
    if not result.ok:
        return _message(500, "Failed to subscribe to newsletter")
    return MessageResponse(message="Successfully subscribed to newsletter")


@router.post("/contact", response_model=MessageResponse)
def contact(body: ContactRequest):
    if not (body.name and body.email and body.subject and body.message):
        return _message(400, "All fields are required")

    result = NotificationService().send_contact_message(body.name, body.email, body.subject, body.message)
    if not result.ok:
        return _message(500, "Failed to send message. Please try again.")
    return MessageResponse(message="Message sent successfully")
