"""SMTP email adapter — delivers through any SMTP relay (MailHog, Postfix, SES SMTP)."""

import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

import structlog

from notifications.channel.email_port import FAILED, SENT, EmailPort

logger = structlog.get_logger(__name__)


class SmtpEmailAdapter(EmailPort):
    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.timeout = timeout

    def _build(self, to, subject, body, html_body, reply_to) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = to
        message["Message-ID"] = make_msgid(domain=self.sender.split("@")[-1])
        if reply_to:
            message["Reply-To"] = reply_to
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")
        return message

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
        reply_to: str | None = None,
    ) -> dict:
        try:
            message = self._build(to, subject, body, html_body, reply_to)
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.username and self.password:
                    server.starttls()
                    server.login(self.username, self.password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError, ValueError) as exc:
            logger.error("SMTP delivery failed", to=to, subject=subject, error=str(exc))
            return {"message_id": None, "status": FAILED, "error": str(exc)}

        logger.info("Email sent", to=to, subject=subject)
        return {"message_id": message["Message-ID"], "status": SENT}
