"""Tests for the plain-text email templates."""

from datetime import UTC, datetime

import pytest
from notifications.templates import TEMPLATE_REGISTRY, get_template
from notifications.templates.formatting import estimated_ship_date, item_lines

ITEMS = [{"name": "Jute Basket", "quantity": 2, "unit_price": "$10.00", "line_total": "$20.00"}]

ORDER_CONTEXT = {
    "order_id": "ord-1001",
    "placed_at": "2024-03-01 10:30 UTC",
    "status": "pending",
    "payment_method": "Pay On Delivery",
    "customer_name": "Jane Doe",
    "customer_email": "jane@example.com",
    "customer_phone": None,
    "address": "12 Market Street, Springfield, IL 62701, USA",
    "items": ITEMS,
    "total": "$20.00",
    "ship_date": "Sunday, March 3, 2024",
    "store_name": "FSH Traders",
}


class TestRegistry:
    def test_all_templates_registered(self):
        assert set(TEMPLATE_REGISTRY) == {
            "order_alert",
            "order_confirmation",
            "cart_checkout",
            "newsletter_welcome",
            "newsletter_signup_alert",
            "contact_message",
            "contact_receipt",
        }

    def test_unknown_template(self):
        with pytest.raises(ValueError):
            get_template("nope")


class TestOrderTemplates:
    def test_order_alert(self):
        rendered = get_template("order_alert").render(ORDER_CONTEXT)

        assert rendered["subject"] == "New Order Received: #ord-1001"
        assert "jane@example.com" in rendered["body"]
        assert "$20.00" in rendered["body"]

    def test_order_confirmation(self):
        rendered = get_template("order_confirmation").render(ORDER_CONTEXT)

        assert rendered["subject"] == "Order Confirmation: #ord-1001"
        assert "Sunday, March 3, 2024" in rendered["body"]
        assert "Jute Basket x 2" in rendered["body"]


class TestOtherTemplates:
    def test_contact_message(self):
        rendered = get_template("contact_message").render(
            {"name": "Sam", "email": "sam@example.com", "subject": "Bulk order", "message": "Hello"}
        )
        assert rendered["subject"] == "New Contact Form Submission: Bulk order"

    def test_contact_receipt(self):
        rendered = get_template("contact_receipt").render(
            {"name": "Sam", "subject": "Bulk order", "message": "Hello", "store_name": "FSH Traders"}
        )
        assert rendered["subject"] == "Thank you for contacting FSH Traders"

    def test_newsletter_welcome(self):
        rendered = get_template("newsletter_welcome").render(
            {
                "email": "sam@example.com",
                "subscribed_at": "2024-03-01 10:30 UTC",
                "store_name": "FSH Traders",
                "storefront_url": "http://localhost:3000",
            }
        )
        assert rendered["subject"] == "Welcome to FSH Traders Newsletter!"


class TestFormatting:
    def test_estimated_ship_date(self):
        placed = datetime(2024, 3, 1, 10, 30, tzinfo=UTC)
        assert estimated_ship_date(placed, 2) == "Sunday, March 3, 2024"

    def test_item_lines(self):
        assert item_lines(ITEMS) == "  Jute Basket x 2 @ $10.00 = $20.00"
