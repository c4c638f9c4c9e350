"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel

# --- Response Schemas ---


class ProductResponse(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "0b6f2c9e-3a51-4c3e-9d6a-7f2f0f4c1a11",
                    "name": "Handwoven Jute Basket",
                    "price": 24.0,
                    "effective_price": 20.4,
                    "category": "Home",
                    "description": "Sturdy jute basket for storage.",
                    "image": "/images/jute-basket.jpg",
                    "stock": 40,
                    "discount": 15.0,
                    "rating": 4.6,
                    "featured": True,
                }
            ]
        }
    }

    id: str
    name: str
    price: float
    effective_price: float
    category: str
    description: str = ""
    image: str = ""
    stock: int = 0
    discount: float = 0.0
    rating: float | None = None
    featured: bool = False


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    count: int


class MessageResponse(BaseModel):
    message: str
