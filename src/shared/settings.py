"""Application settings read from the environment.

Protean domain configuration lives under ``[tool.protean]`` in
pyproject.toml. Everything the storefront needs beyond the domain layer
(adapters, mail routing, remote-call timeouts) is read here.
"""

import os
from dataclasses import dataclass
from functools import lru_cache


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    store_name: str
    storefront_url: str
    admin_email: str
    email_from: str
    email_adapter: str
    store_adapter: str
    identity_adapter: str
    smtp_host: str
    smtp_port: int
    smtp_user: str | None
    smtp_password: str | None
    remote_call_timeout: float
    session_resolve_timeout: float
    shipping_lead_days: int


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings (cached; call ``reset_settings`` in tests)."""
    return Settings(
        store_name=os.getenv("STORE_NAME", "FSH Traders"),
        storefront_url=os.getenv("STOREFRONT_URL", "http://localhost:3000"),
        admin_email=os.getenv("ADMIN_EMAIL", "orders@fshtraders.example"),
        email_from=os.getenv("EMAIL_FROM", "no-reply@fshtraders.example"),
        email_adapter=os.getenv("EMAIL_ADAPTER", "fake"),
        store_adapter=os.getenv("STORE_ADAPTER", "protean"),
        identity_adapter=os.getenv("IDENTITY_ADAPTER", "fake"),
        smtp_host=os.getenv("SMTP_HOST", "localhost"),
        smtp_port=_int_env("SMTP_PORT", 1025),
        smtp_user=os.getenv("SMTP_USER") or None,
        smtp_password=os.getenv("SMTP_PASSWORD") or None,
        remote_call_timeout=_float_env("REMOTE_CALL_TIMEOUT", 10.0),
        session_resolve_timeout=_float_env("SESSION_RESOLVE_TIMEOUT", 5.0),
        shipping_lead_days=_int_env("SHIPPING_LEAD_DAYS", 2),
    )


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
