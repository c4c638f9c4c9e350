"""Application tests for the Notification Service."""

from shared.settings import get_settings
from shared.store.records import CustomerContact, LineItem


class TestOrderNotifications:
    def test_order_alert_goes_to_admin(self, service, fake_email, order):
        result = service.send_order_alert(order)

        assert result.ok
        (email,) = fake_email.sent_to(get_settings().admin_email)
        assert email["subject"] == "New Order Received: #ord-1001"
        assert "$25.50" in email["body"]
        assert result.message_id == email["message_id"]

    def test_order_confirmation_goes_to_customer(self, service, fake_email, order):
        result = service.send_order_confirmation(order)

        assert result.ok
        (email,) = fake_email.sent_to("jane@example.com")
        assert email["subject"] == "Order Confirmation: #ord-1001"
        assert "Sunday, March 3, 2024" in email["body"]

    def test_explicit_customer_overrides_order_contact(self, service, fake_email, order):
        other = CustomerContact(identity_id="x", email="gift@example.com", full_name="Gift Receiver")
        service.send_order_confirmation(order, customer=other)

        assert len(fake_email.sent_to("gift@example.com")) == 1

    def test_channel_failure_is_reported_not_raised(self, service, fake_email, order):
        fake_email.configure(should_succeed=False, failure_reason="relay down")

        result = service.send_order_alert(order)

        assert not result.ok
        assert result.error == "relay down"


class TestCartReminder:
    def test_cart_reminder(self, service, fake_email):
        customer = CustomerContact(identity_id="c", email="sam@example.com", full_name="Sam Lee")
        lines = (LineItem(product_id="A", name="Jute Basket", unit_price=10.0, quantity=2),)

        result = service.send_cart_reminder(lines, customer, 20.0)

        assert result.ok
        (email,) = fake_email.sent_to("sam@example.com")
        assert "Your Cart Checkout" in email["subject"]
        assert "Sam" in email["body"]


class TestNewsletter:
    def test_welcome_and_admin_alert(self, service, fake_email):
        result = service.send_newsletter_welcome("sam@example.com")

        assert result.ok
        assert len(fake_email.sent_to("sam@example.com")) == 1
        assert len(fake_email.sent_to(get_settings().admin_email)) == 1

    def test_no_admin_alert_when_welcome_fails(self, service, fake_email):
        fake_email.configure(failing_recipients={"sam@example.com"})

        result = service.send_newsletter_welcome("sam@example.com")

        assert not result.ok
        assert fake_email.sent_emails == []


class TestContact:
    def test_contact_message_and_receipt(self, service, fake_email):
        result = service.send_contact_message("Sam", "sam@example.com", "Bulk order", "Do you ship abroad?")

        assert result.ok
        (admin_copy,) = fake_email.sent_to(get_settings().admin_email)
        assert admin_copy["reply_to"] == "sam@example.com"
        assert len(fake_email.sent_to("sam@example.com")) == 1

    def test_receipt_failure_does_not_fail_the_message(self, service, fake_email):
        fake_email.configure(failing_recipients={"sam@example.com"})

        result = service.send_contact_message("Sam", "sam@example.com", "Bulk order", "Hello")

        assert result.ok
        assert len(fake_email.failed_emails) == 1
