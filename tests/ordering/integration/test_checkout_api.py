"""Integration tests for Checkout API endpoints via TestClient."""

import pytest
from fastapi.testclient import TestClient
from ordering.api.routes import cart_router, checkout_router
from shared.store.records import AddressRecord, ProductRecord, ProfileRecord


@pytest.fixture()
def client(api_app, fake_store, fake_email):
    api_app.include_router(cart_router)
    api_app.include_router(checkout_router)
    for record in (
        ProductRecord(id="A", name="Jute Basket", price=10.0, category="Home"),
        ProductRecord(id="B", name="Coir Mat", price=5.5, category="Home"),
    ):
        fake_store.products[record.id] = record
    return TestClient(api_app)


@pytest.fixture()
def shopper(sign_up):
    return sign_up()


@pytest.fixture()
def headers(client, shopper):
    _, headers = shopper
    client.post("/cart/items", json={"product_id": "A", "quantity": 2}, headers=headers)
    client.post("/cart/items", json={"product_id": "B", "quantity": 1}, headers=headers)
    return headers


def _begin(client, headers):
    response = client.post("/checkout", headers=headers)
    assert response.status_code == 201
    return response.json()["checkout_id"]


class TestBeginCheckout:
    def test_begin(self, client, headers):
        response = client.post("/checkout", headers=headers)

        assert response.status_code == 201
        body = response.json()
        assert body["stage"] == "AddressCapture"
        assert body["saved_address"] is None

    def test_begin_prefills_saved_address(self, client, headers, shopper, fake_store, address):
        session, _ = shopper
        fake_store.seed_profile(ProfileRecord(identity_id=session.user.user_id, address=AddressRecord(**address)))

        body = client.post("/checkout", headers=headers).json()
        assert body["saved_address"] == address

    def test_empty_cart_conflict(self, client, sign_up):
        _, other = sign_up(email="empty@example.com")

        response = client.post("/checkout", headers=other)
        assert response.status_code == 409

    def test_second_begin_conflicts(self, client, headers):
        _begin(client, headers)
        assert client.post("/checkout", headers=headers).status_code == 409

    def test_requires_sign_in(self, client):
        assert client.post("/checkout").status_code == 401


class TestSubmitCheckout:
    def test_submit_places_order(self, client, headers, fake_store, fake_email, address):
        checkout_id = _begin(client, headers)

        response = client.post(f"/checkout/{checkout_id}/submit", json={"address": address}, headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["stage"] == "Complete"
        assert body["formatted_total"] == "$25.50"
        assert body["warnings"] == []
        assert fake_store.orders[body["order_id"]].total == pytest.approx(25.5)
        assert client.get("/cart", headers=headers).json()["items"] == []
        assert len(fake_email.sent_emails) == 2

    def test_invalid_address(self, client, headers, address):
        checkout_id = _begin(client, headers)

        response = client.post(
            f"/checkout/{checkout_id}/submit",
            json={"address": {**address, "street": ""}},
            headers=headers,
        )

        assert response.status_code == 422
        assert "street" in response.json()["error"]

    def test_persistence_failure(self, client, headers, fake_store, address):
        checkout_id = _begin(client, headers)
        fake_store.configure(fail_on={"create_order"})

        response = client.post(f"/checkout/{checkout_id}/submit", json={"address": address}, headers=headers)

        assert response.status_code == 503
        fake_store.configure()
        assert len(client.get("/cart", headers=headers).json()["items"]) == 2
        state = client.get(f"/checkout/{checkout_id}", headers=headers).json()
        assert state["stage"] == "Failed"
        assert state["failed_stage"] == "Submitting"

    def test_notification_failures_become_warnings(self, client, headers, fake_email, address):
        checkout_id = _begin(client, headers)
        fake_email.configure(should_succeed=False)

        response = client.post(f"/checkout/{checkout_id}/submit", json={"address": address}, headers=headers)

        assert response.status_code == 200
        assert len(response.json()["warnings"]) == 2

    def test_other_customer_forbidden(self, client, headers, sign_up, address):
        checkout_id = _begin(client, headers)
        _, intruder = sign_up(email="intruder@example.com")

        response = client.post(f"/checkout/{checkout_id}/submit", json={"address": address}, headers=intruder)
        assert response.status_code == 403


class TestAbandonCheckout:
    def test_abandon(self, client, headers):
        checkout_id = _begin(client, headers)

        response = client.post(f"/checkout/{checkout_id}/abandon", headers=headers)

        assert response.status_code == 200
        assert response.json()["stage"] == "Idle"
        _begin(client, headers)

    def test_unknown_checkout(self, client, headers):
        assert client.get("/checkout/does-not-exist", headers=headers).status_code == 404
