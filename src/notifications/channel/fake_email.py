"""Fake email adapter — records sent emails for testing."""

import time
from collections.abc import Iterable
from uuid import uuid4

from notifications.channel.email_port import FAILED, SENT, EmailPort


class FakeEmailAdapter(EmailPort):
    """Email adapter that keeps messages in memory for test assertions.

    Failures can be switched on for every message or only for specific
    recipients, which lets tests fail the operator alert while the customer
    confirmation still goes out.
    """

    def __init__(self):
        self.sent_emails: list[dict] = []
        self.failed_emails: list[dict] = []
        self.should_succeed = True
        self.failing_recipients: set[str] = set()
        self.failure_reason = "Email delivery failed"
        self.delay = 0.0

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Email delivery failed",
        failing_recipients: Iterable[str] = (),
        delay: float = 0.0,
    ):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.failing_recipients = set(failing_recipients)
        self.delay = delay

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
        reply_to: str | None = None,
    ) -> dict:
        if self.delay:
            time.sleep(self.delay)

        record = {
            "to": to,
            "subject": subject,
            "body": body,
            "html_body": html_body,
            "reply_to": reply_to,
        }
        if not self.should_succeed or to in self.failing_recipients:
            self.failed_emails.append(record)
            return {"message_id": None, "status": FAILED, "error": self.failure_reason}

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append({"message_id": message_id, **record})
        return {"message_id": message_id, "status": SENT}

    def sent_to(self, address: str) -> list[dict]:
        return [email for email in self.sent_emails if email["to"] == address]

    def reset(self):
        self.sent_emails.clear()
        self.failed_emails.clear()
        self.configure()
