import pytest


@pytest.fixture()
def service(fake_email):
    from notifications.service import NotificationService

    return NotificationService(channel=fake_email)


@pytest.fixture()
def order(address):
    from datetime import UTC, datetime

    from shared.store.records import AddressRecord, CustomerContact, LineItem, OrderRecord

    return OrderRecord(
        id="ord-1001",
        items=(
            LineItem(product_id="A", name="Jute Basket", unit_price=10.0, quantity=2),
            LineItem(product_id="B", name="Coir Mat", unit_price=5.5, quantity=1),
        ),
        total=25.5,
        customer=CustomerContact(identity_id="cust-001", email="jane@example.com", full_name="Jane Doe"),
        address=AddressRecord(**address),
        created_at=datetime(2024, 3, 1, 10, 30, tzinfo=UTC),
    )
