"""SMTP mail backend."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from .abstract_sender import EmailDeliveryError, EmailSender

logger = logging.getLogger(__name__)


class SmtpEmailSender(EmailSender):
    """Send messages synchronously through an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        *,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _build_message(self, to: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = to
        message.set_content(body)
        return message

    def send_mail(self, to: str, subject: str, body: str) -> None:
        message = self._build_message(to, subject, body)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("SMTP delivery to %s failed: %s", to, exc)
            raise EmailDeliveryError(f"Could not send mail to {to}: {exc}") from exc

        logger.info("Sent '%s' to %s", subject, to)
