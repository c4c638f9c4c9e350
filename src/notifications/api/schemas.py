"""Pydantic request/response schemas for the notification endpoints.

Request bodies arrive from storefront pages, so the nested ``order``,
``cart`` and ``customer`` objects are accepted loosely and validated by the
route; a missing or malformed part is answered with 400 and a message.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Payload parts ---


class NotifyLine(BaseModel):
    product_id: str = Field(..., validation_alias="id")
    name: str
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)

    model_config = {"populate_by_name": True}


class NotifyAddress(BaseModel):
    full_name: str
    street: str
    city: str
    state: str
    postal_code: str
    country: str


class NotifyOrder(BaseModel):
    id: str
    items: list[NotifyLine] = Field(..., min_length=1)
    status: str = "pending"
    created_at: datetime | None = None
    address: NotifyAddress
    payment_method: str = "pay_on_delivery"


class NotifyCustomer(BaseModel):
    name: str
    email: str
    phone: str | None = None
    user_id: str | None = None


# --- Request Schemas ---


class OrderNotifyRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "order": {
                        "id": "ord-1001",
                        "items": [{"id": "prod-001", "name": "Jute Basket", "price": 20.4, "quantity": 2}],
                        "status": "pending",
                        "address": {
                            "full_name": "Jane Doe",
                            "street": "12 Market Street",
                            "city": "Springfield",
                            "state": "IL",
                            "postal_code": "62701",
                            "country": "USA",
                        },
                    },
                    "customer": {"name": "Jane Doe", "email": "jane.doe@example.com"},
                }
            ]
        }
    }

    order: dict | None = None
    customer: dict | None = None


class CartNotifyRequest(BaseModel):
    cart: list[dict] | None = None
    customer: dict | None = None
    total: float | None = None


class NewsletterRequest(BaseModel):
    email: str | None = None


class ContactRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    subject: str | None = None
    message: str | None = None


# --- Response Schemas ---


class MessageResponse(BaseModel):
    message: str
    error: str | None = None
