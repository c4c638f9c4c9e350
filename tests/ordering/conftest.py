import pytest


@pytest.fixture(autouse=True)
def _ctx():
    """Push the ordering domain context around each test."""
    from ordering.domain import ordering

    ctx = ordering.domain_context()
    ctx.push()

    yield

    ctx.pop()


@pytest.fixture()
def shopper():
    from identity.session import Identity

    return Identity(user_id="cust-001", email="jane@example.com", display_name="Jane Doe")


@pytest.fixture()
def fill_cart():
    """Add ``(product_id, name, price, quantity)`` lines to a customer's cart through commands."""
    from ordering.cart.items import AddToCart
    from protean import current_domain

    def fill(customer_id, *lines):
        for product_id, name, price, quantity in lines:
            current_domain.process(
                AddToCart(customer_id=customer_id, product_id=product_id, name=name, price=price, quantity=quantity),
                asynchronous=False,
            )

    return fill


@pytest.fixture()
def orchestrator(fake_store, fake_email):
    from notifications.service import NotificationService
    from ordering.checkout.orchestrator import CheckoutOrchestrator

    return CheckoutOrchestrator(fake_store, NotificationService(channel=fake_email), call_timeout=2.0)
