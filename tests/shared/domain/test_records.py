"""Tests for the document store records and the order status machine."""

import pytest
from pydantic import ValidationError
from shared.store.records import (
    AddressRecord,
    CustomerContact,
    LineItem,
    OrderStatus,
    ProductFilter,
    ProductRecord,
    can_transition,
)


class TestOrderStatusMachine:
    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PENDING, OrderStatus.PROCESSING),
            (OrderStatus.PROCESSING, OrderStatus.SHIPPED),
            (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
            (OrderStatus.PENDING, OrderStatus.CANCELLED),
            (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
        ],
    )
    def test_forward_transitions_allowed(self, current, target):
        assert can_transition(current, target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PROCESSING, OrderStatus.PENDING),
            (OrderStatus.PENDING, OrderStatus.SHIPPED),
            (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
            (OrderStatus.CANCELLED, OrderStatus.PENDING),
            (OrderStatus.PENDING, OrderStatus.PENDING),
        ],
    )
    def test_backward_skipping_and_terminal_rejected(self, current, target):
        assert not can_transition(current, target)


def _product(**overrides):
    data = {"id": "p1", "name": "Jute Basket", "price": 20.0, "category": "baskets", "description": "Handwoven"}
    data.update(overrides)
    return ProductRecord(**data)


class TestProductFilter:
    def test_default_hides_inactive(self):
        assert ProductFilter().matches(_product())
        assert not ProductFilter().matches(_product(is_active=False))
        assert ProductFilter(active_only=False).matches(_product(is_active=False))

    def test_category_and_featured(self):
        assert not ProductFilter(category="mats").matches(_product())
        assert ProductFilter(featured=True).matches(_product(featured=True))
        assert not ProductFilter(featured=True).matches(_product())

    def test_search_is_case_insensitive_over_name_and_description(self):
        assert ProductFilter(search="JUTE").matches(_product())
        assert ProductFilter(search="handwoven").matches(_product())
        assert not ProductFilter(search="ceramic").matches(_product())


class TestValueRecords:
    def test_line_total(self):
        assert LineItem(product_id="A", name="A", unit_price=2.5, quantity=4).line_total == 10.0

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            LineItem(product_id="A", name="A", unit_price=2.5, quantity=0)

    def test_discount_bounded(self):
        with pytest.raises(ValidationError):
            _product(discount=150)

    def test_address_one_line(self, address):
        assert AddressRecord(**address).one_line() == "12 Market Street, Springfield, IL 62701, USA"

    def test_first_name(self):
        contact = CustomerContact(identity_id="c", email="j@example.com", full_name="Jane Doe")
        assert contact.first_name == "Jane"
