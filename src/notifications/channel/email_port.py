"""Email channel port — abstract interface for transactional email dispatch."""

from abc import ABC, abstractmethod

SENT = "sent"
FAILED = "failed"


class EmailPort(ABC):
    """Abstract interface for email dispatch adapters.

    Adapters report delivery problems in the returned dict rather than
    raising, so one failed message never aborts the flow that sent it.
    """

    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
        reply_to: str | None = None,
    ) -> dict:
        """Send an email message.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
