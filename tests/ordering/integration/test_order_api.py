"""Integration tests for Order API endpoints via TestClient."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from ordering.api.routes import order_router
from shared.store.records import AddressRecord, CustomerContact, LineItem, OrderRecord


@pytest.fixture()
def client(api_app, fake_store):
    api_app.include_router(order_router)
    return TestClient(api_app)


def _order(customer_id, address, placed_at, total=25.5):
    return OrderRecord(
        items=(LineItem(product_id="A", name="Basket", unit_price=total, quantity=1),),
        total=total,
        customer=CustomerContact(identity_id=customer_id, email=f"{customer_id}@example.com", full_name="Jane Doe"),
        address=AddressRecord(**address),
        created_at=placed_at,
    )


@pytest.fixture()
def orders(fake_store, sign_up, address):
    session, headers = sign_up()
    now = datetime.now(UTC)
    older = fake_store.seed_order(_order(session.user.user_id, address, now - timedelta(days=1), total=10.0))
    newer = fake_store.seed_order(_order(session.user.user_id, address, now, total=25.5))
    fake_store.seed_order(_order("someone-else", address, now))
    return {"headers": headers, "older": older, "newer": newer}


class TestMyOrders:
    def test_lists_only_own_orders_newest_first(self, client, orders):
        response = client.get("/orders/mine", headers=orders["headers"])

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert [o["id"] for o in body["orders"]] == [orders["newer"], orders["older"]]
        assert body["orders"][0]["formatted_total"] == "$25.50"


class TestAdminOrders:
    def test_customer_cannot_list_all_orders(self, client, orders):
        assert client.get("/orders", headers=orders["headers"]).status_code == 403

    def test_admin_lists_all_orders(self, client, orders, sign_up_admin):
        _, admin = sign_up_admin()

        response = client.get("/orders", headers=admin)
        assert response.json()["count"] == 3

    def test_admin_moves_order_forward(self, client, orders, sign_up_admin):
        _, admin = sign_up_admin()

        response = client.put(f"/orders/{orders['newer']}/status", json={"status": "processing"}, headers=admin)

        assert response.status_code == 200
        assert response.json()["status"] == "processing"

    def test_backward_transition_rejected(self, client, orders, sign_up_admin, fake_store):
        _, admin = sign_up_admin()
        client.put(f"/orders/{orders['newer']}/status", json={"status": "processing"}, headers=admin)

        response = client.put(f"/orders/{orders['newer']}/status", json={"status": "pending"}, headers=admin)

        assert response.status_code == 400
        assert fake_store.orders[orders["newer"]].status.value == "processing"

    def test_unknown_status_value(self, client, orders, sign_up_admin):
        _, admin = sign_up_admin()

        response = client.put(f"/orders/{orders['newer']}/status", json={"status": "lost"}, headers=admin)
        assert response.status_code == 422

    def test_unknown_order(self, client, sign_up_admin):
        _, admin = sign_up_admin()

        response = client.put("/orders/missing/status", json={"status": "processing"}, headers=admin)
        assert response.status_code == 404
