"""The storefront error taxonomy mapped to HTTP responses."""

import pytest
from fastapi import APIRouter
from fastapi.testclient import TestClient
from protean.exceptions import ObjectNotFoundError, ValidationError
from shared.errors import (
    AddressValidationError,
    CheckoutInProgress,
    EmptyCart,
    Forbidden,
    InvalidCartOperation,
    PersistenceFailure,
    SessionPending,
    Unauthenticated,
)
from shared.store.port import DocumentStoreError

CASES = {
    "validation": (ValidationError({"name": ["is required"]}), 400),
    "cart": (InvalidCartOperation({"quantity": ["must be positive"]}), 422),
    "address": (AddressValidationError({"city": ["City is required"]}), 422),
    "unauthenticated": (Unauthenticated("Sign in required"), 401),
    "pending": (SessionPending("Session still resolving"), 503),
    "forbidden": (Forbidden("Admins only"), 403),
    "empty": (EmptyCart("Your cart is empty"), 409),
    "in-progress": (CheckoutInProgress("Already checking out"), 409),
    "missing": (ObjectNotFoundError("Order does not exist"), 404),
    "persistence": (PersistenceFailure("store down"), 503),
    "store": (DocumentStoreError("get_order", "store down"), 503),
}


@pytest.fixture()
def client(api_app):
    router = APIRouter()

    @router.get("/raise/{case}")
    async def raise_case(case: str):
        raise CASES[case][0]

    api_app.include_router(router)
    return TestClient(api_app)


@pytest.mark.parametrize("case", sorted(CASES))
def test_status_codes(client, case):
    response = client.get(f"/raise/{case}")

    assert response.status_code == CASES[case][1]


def test_validation_body_carries_field_messages(client):
    response = client.get("/raise/address")

    assert response.json() == {"error": {"city": ["City is required"]}}


def test_plain_errors_carry_message(client):
    assert "Admins only" in client.get("/raise/forbidden").json()["error"]
