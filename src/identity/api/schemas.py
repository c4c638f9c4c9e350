"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class SignUpRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"email": "jane.doe@example.com", "password": "s3cret-pass", "display_name": "Jane Doe"}]
        }
    }

    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=1, max_length=128)
    display_name: str | None = Field(None, max_length=200)


class SignInRequest(BaseModel):
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


class ReconcileWishlistRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"items": ["prod-001", "prod-002"]}]}}

    items: list[str] = Field(default_factory=list)


class ChangeRoleRequest(BaseModel):
    role: str = Field(..., pattern="^(customer|admin)$")


# --- Response Schemas ---


class IdentityResponse(BaseModel):
    user_id: str
    email: str
    role: str
    display_name: str | None = None


class SessionResponse(BaseModel):
    token: str
    user: IdentityResponse


class WishlistResponse(BaseModel):
    items: list[str]


class ToggleWishlistResponse(BaseModel):
    product_id: str
    wishlisted: bool
    items: list[str]


class ProfileResponse(BaseModel):
    user_id: str
    email: str | None = None
    display_name: str | None = None
    role: str
    wishlist: list[str] = Field(default_factory=list)


class StatusResponse(BaseModel):
    status: str = "ok"
