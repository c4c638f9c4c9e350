"""Application tests for order placement and back-office status commands."""

import json
from datetime import UTC, datetime

import pytest
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.order.status import UpdateOrderStatus
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from shared.store.records import OrderStatus


@pytest.fixture()
def place(address):
    def _place(idempotency_key="key-001"):
        return current_domain.process(
            PlaceOrder(
                customer=json.dumps({"identity_id": "cust-001", "email": "jane@example.com", "full_name": "Jane Doe"}),
                address=json.dumps(address),
                items=json.dumps(
                    [
                        {"product_id": "A", "name": "Basket", "unit_price": 10.0, "quantity": 2},
                        {"product_id": "B", "name": "Mat", "unit_price": 5.5, "quantity": 1},
                    ]
                ),
                total=25.5,
                payment_method="pay_on_delivery",
                idempotency_key=idempotency_key,
                created_at=datetime.now(UTC),
            ),
            asynchronous=False,
        )

    return _place


class TestPlaceOrder:
    def test_place_order_persists_pending_order(self, place):
        order_id = place()

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.PENDING.value
        assert order.total == 25.5
        assert len(order.items) == 2
        assert order.customer.email == "jane@example.com"

    def test_same_idempotency_key_returns_existing_order(self, place):
        first = place()
        second = place()

        assert first == second
        assert len(current_domain.repository_for(Order)._dao.query.all().items) == 1

    def test_different_keys_create_separate_orders(self, place):
        assert place("key-001") != place("key-002")


class TestUpdateOrderStatus:
    def test_forward_transition(self, place):
        order_id = place()

        status = current_domain.process(
            UpdateOrderStatus(order_id=order_id, status=OrderStatus.PROCESSING.value),
            asynchronous=False,
        )

        assert status == OrderStatus.PROCESSING.value
        assert current_domain.repository_for(Order).get(order_id).status == OrderStatus.PROCESSING.value

    def test_backward_transition_rejected(self, place):
        order_id = place()
        current_domain.process(UpdateOrderStatus(order_id=order_id, status="cancelled"), asynchronous=False)

        with pytest.raises(ValidationError):
            current_domain.process(UpdateOrderStatus(order_id=order_id, status="pending"), asynchronous=False)

        assert current_domain.repository_for(Order).get(order_id).status == OrderStatus.CANCELLED.value

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateOrderStatus(order_id="missing", status="processing"), asynchronous=False)
