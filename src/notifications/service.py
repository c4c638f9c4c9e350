"""Notification Service — transactional email for orders, carts, newsletter and contact.

Every ``send_*`` method renders a template, hands it to the email channel
and returns a ``DispatchResult``. Channel failures are reported in the
result and logged; they are never raised, so callers decide whether a
failed email matters.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from notifications.channel import get_email_channel
from notifications.channel.email_port import SENT, EmailPort
from notifications.templates import get_template
from notifications.templates.formatting import estimated_ship_date
from ordering.cart.pricing import format_money
from shared.settings import Settings, get_settings
from shared.store.records import CustomerContact, LineItem, OrderRecord

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    ok: bool
    message_id: str | None = None
    error: str | None = None


def _payment_label(order: OrderRecord) -> str:
    return order.payment_method.value.replace("_", " ").title()


def _line_context(lines: Sequence[LineItem]) -> list[dict]:
    return [
        {
            "name": line.name,
            "quantity": line.quantity,
            "unit_price": format_money(line.unit_price),
            "line_total": format_money(line.line_total),
        }
        for line in lines
    ]


class NotificationService:
    def __init__(self, channel: EmailPort | None = None, settings: Settings | None = None):
        self._channel = channel
        self.settings = settings or get_settings()

    @property
    def channel(self) -> EmailPort:
        return self._channel or get_email_channel()

    def _dispatch(self, template_name: str, to: str, context: dict, reply_to: str | None = None) -> DispatchResult:
        rendered = get_template(template_name).render(context)
        result = self.channel.send(to, rendered["subject"], rendered["body"], reply_to=reply_to)

        if result.get("status") == SENT:
            logger.info("Notification sent", template=template_name, to=to, message_id=result.get("message_id"))
            return DispatchResult(ok=True, message_id=result.get("message_id"))

        error = result.get("error") or "Email delivery failed"
        logger.warning("Notification failed", template=template_name, to=to, error=error)
        return DispatchResult(ok=False, error=error)

    def _order_context(self, order: OrderRecord, customer: CustomerContact) -> dict:
        return {
            "order_id": order.id,
            "placed_at": f"{order.created_at:%Y-%m-%d %H:%M} UTC",
            "status": order.status.value,
            "payment_method": _payment_label(order),
            "customer_name": customer.full_name,
            "customer_email": customer.email,
            "customer_phone": customer.phone,
            "address": order.address.one_line(),
            "items": _line_context(order.items),
            "total": format_money(order.total),
            "ship_date": estimated_ship_date(order.created_at, self.settings.shipping_lead_days),
            "store_name": self.settings.store_name,
        }

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    def send_order_alert(self, order: OrderRecord, customer: CustomerContact | None = None) -> DispatchResult:
        """Operator-facing notice that ``order`` was placed."""
        context = self._order_context(order, customer or order.customer)
        return self._dispatch("order_alert", self.settings.admin_email, context)

    def send_order_confirmation(self, order: OrderRecord, customer: CustomerContact | None = None) -> DispatchResult:
        """Customer-facing confirmation with the order summary and estimated ship date."""
        customer = customer or order.customer
        context = self._order_context(order, customer)
        return self._dispatch("order_confirmation", customer.email, context)

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def send_cart_reminder(self, cart: Sequence[LineItem], customer: CustomerContact, total: float) -> DispatchResult:
        context = {
            "customer_name": customer.first_name or customer.full_name,
            "items": _line_context(cart),
            "total": format_money(total),
            "store_name": self.settings.store_name,
            "storefront_url": self.settings.storefront_url,
        }
        return self._dispatch("cart_checkout", customer.email, context)

    # -------------------------------------------------------------------
    # Newsletter & contact
    # -------------------------------------------------------------------
    def send_newsletter_welcome(self, email: str) -> DispatchResult:
        """Welcome the subscriber and tell the operator. The result reflects the subscriber email."""
        context = {
            "email": email,
            "subscribed_at": f"{datetime.now(UTC):%Y-%m-%d %H:%M} UTC",
            "store_name": self.settings.store_name,
            "storefront_url": self.settings.storefront_url,
        }
        result = self._dispatch("newsletter_welcome", email, context)
        if result.ok:
            self._dispatch("newsletter_signup_alert", self.settings.admin_email, context)
        return result

    def send_contact_message(self, name: str, email: str, subject: str, message: str) -> DispatchResult:
        """Forward a contact-form message to the operator and send the sender a receipt.

        The result reflects the operator copy; a failed receipt is only logged.
        """
        context = {
            "name": name,
            "email": email,
            "subject": subject,
            "message": message,
            "store_name": self.settings.store_name,
        }
        result = self._dispatch("contact_message", self.settings.admin_email, context, reply_to=email)
        if result.ok:
            self._dispatch("contact_receipt", email, context)
        return result
