"""Catalogue domain API package."""

from catalogue.api.routes import product_router, sync_router

__all__ = ["product_router", "sync_router"]
