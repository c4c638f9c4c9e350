"""Email channel registry — pluggable transactional email delivery.

Uses the fake adapter by default; set EMAIL_ADAPTER=smtp to deliver
through the SMTP relay described by the SMTP_* settings.
"""

from notifications.channel.email_port import EmailPort
from shared.settings import get_settings

_email_instance: EmailPort | None = None


def get_email_channel() -> EmailPort:
    """Return the configured email adapter (singleton)."""
    global _email_instance
    if _email_instance is None:
        settings = get_settings()
        if settings.email_adapter == "fake":
            from notifications.channel.fake_email import FakeEmailAdapter

            _email_instance = FakeEmailAdapter()
        elif settings.email_adapter == "smtp":
            from notifications.channel.smtp_email import SmtpEmailAdapter

            _email_instance = SmtpEmailAdapter(
                host=settings.smtp_host,
                port=settings.smtp_port,
                sender=settings.email_from,
                username=settings.smtp_user,
                password=settings.smtp_password,
                timeout=settings.remote_call_timeout,
            )
        else:
            raise ValueError(f"Unknown email adapter: {settings.email_adapter}")
    return _email_instance


def set_email_channel(channel: EmailPort) -> None:
    global _email_instance
    _email_instance = channel


def reset_email_channel():
    """Reset the email channel singleton (useful for testing)."""
    global _email_instance
    _email_instance = None
