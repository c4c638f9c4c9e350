"""Notifications API package."""

from notifications.api.routes import router

__all__ = ["router"]
