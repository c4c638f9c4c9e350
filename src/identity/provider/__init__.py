"""Identity provider abstraction — pluggable authentication backend."""

from identity.provider.port import AuthSession, AuthUser, IdentityProvider
from shared.settings import get_settings

__all__ = ["AuthSession", "AuthUser", "IdentityProvider", "get_identity_provider", "reset_identity_provider"]

_provider_instance = None


def get_identity_provider() -> IdentityProvider:
    """Return the configured identity provider (singleton).

    Uses FakeIdentityProvider by default. Configure via the
    IDENTITY_ADAPTER environment variable.
    """
    global _provider_instance
    if _provider_instance is None:
        adapter = get_settings().identity_adapter
        if adapter == "fake":
            from identity.provider.fake_provider import FakeIdentityProvider

            _provider_instance = FakeIdentityProvider()
        else:
            raise ValueError(f"Unknown identity adapter: {adapter}")
    return _provider_instance


def reset_identity_provider():
    """Reset the identity provider singleton (useful for testing)."""
    global _provider_instance
    _provider_instance = None
