"""Shared BDD fixtures and step definitions for the Catalogue domain."""

import pytest
from pytest_bdd import given, parsers, then
from shared.store.records import ProductRecord


@pytest.fixture()
def results():
    """Products the shopper is looking at after a When step."""
    return []


def _stock(fake_store, **fields):
    product = ProductRecord(id=f"prod-{len(fake_store.products) + 1:03d}", **fields)
    fake_store.products[product.id] = product


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a featured product "{name}" in "{category}" priced {price:f} with {discount:d} percent off'))
def featured_product(fake_store, name, category, price, discount):
    _stock(fake_store, name=name, category=category, price=price, discount=discount, featured=True)


@given(parsers.cfparse('a product "{name}" in "{category}" priced {price:f} described as "{description}"'))
def described_product(fake_store, name, category, price, description):
    _stock(fake_store, name=name, category=category, price=price, description=description)


@given(parsers.cfparse('a retired product "{name}" in "{category}" priced {price:f}'))
def retired_product(fake_store, name, category, price):
    _stock(fake_store, name=name, category=category, price=price, is_active=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('they see "{names}"'))
def they_see(results, names):
    expected = {name.strip() for name in names.split(",")}
    assert {product.name for product in results} == expected
