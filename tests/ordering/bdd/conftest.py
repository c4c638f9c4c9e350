"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.cart import ShoppingCart
from pytest_bdd import given, parsers, then
from shared.errors import InvalidCartOperation


@pytest.fixture()
def error():
    """Container for exceptions raised in When steps."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('an empty cart for customer "{customer_id}"'), target_fixture="cart")
def empty_cart(customer_id):
    return ShoppingCart.create(customer_id=customer_id)


@given(parsers.cfparse('{qty:d} of product "{product_id}" priced {price:f} are in the cart'))
def cart_holds(cart, qty, product_id, price):
    cart.add_item(product_id, f"Product {product_id}", price, quantity=qty)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the cart operation is rejected")
def cart_operation_rejected(error):
    assert isinstance(error["exc"], InvalidCartOperation)
