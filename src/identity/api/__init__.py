"""Identity domain API package."""

from identity.api.routes import admin_router, auth_router, wishlist_router

__all__ = ["auth_router", "wishlist_router", "admin_router"]
