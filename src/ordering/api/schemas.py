"""Pydantic request/response schemas for the Ordering API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from shared.store.records import OrderStatus

# --- Cart Schemas ---


class AddCartItemRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "0b6f2c9e-3a51-4c3e-9d6a-7f2f0f4c1a11", "quantity": 2}]}}

    product_id: str
    quantity: int = 1


class UpdateCartItemRequest(BaseModel):
    quantity: int


class CartLineResponse(BaseModel):
    product_id: str
    name: str
    unit_price: float
    list_price: float | None = None
    discount: float = 0.0
    quantity: int
    line_total: float


class CartResponse(BaseModel):
    cart_id: str | None = None
    items: list[CartLineResponse] = Field(default_factory=list)
    item_count: int = 0
    total: float = 0.0
    formatted_total: str


# --- Checkout Schemas ---


class SubmitCheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "address": {
                        "full_name": "Jane Doe",
                        "street": "12 Market Street",
                        "city": "Springfield",
                        "state": "IL",
                        "postal_code": "62701",
                        "country": "USA",
                    },
                    "payment_method": "pay_on_delivery",
                    "phone": "+1-555-0100",
                }
            ]
        }
    }

    # Unvalidated here; the checkout reports per-field errors
    address: dict[str, str | None] = Field(default_factory=dict)
    payment_method: str = "pay_on_delivery"
    phone: str | None = Field(None, max_length=30)


class CheckoutResponse(BaseModel):
    checkout_id: str
    stage: str
    order_id: str | None = None
    failed_stage: str | None = None
    failure_reason: str | None = None
    attempts: int = 0
    warnings: list[str] = Field(default_factory=list)
    saved_address: dict | None = None


class CheckoutResultResponse(BaseModel):
    checkout_id: str
    stage: str
    order_id: str | None
    total: float
    formatted_total: str
    warnings: list[str] = Field(default_factory=list)


# --- Order Schemas ---


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus


class OrderLineResponse(BaseModel):
    product_id: str
    name: str
    unit_price: float
    quantity: int


class OrderResponse(BaseModel):
    id: str
    status: str
    total: float
    formatted_total: str
    items: list[OrderLineResponse]
    customer: dict
    address: dict
    payment_method: str
    created_at: datetime


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    count: int
