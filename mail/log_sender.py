"""Mail backend that only writes messages to the log."""

from __future__ import annotations

import logging

from .abstract_sender import EmailSender

logger = logging.getLogger(__name__)


class LogEmailSender(EmailSender):
    """Used when no SMTP relay is configured, e.g. in local development."""

    def send_mail(self, to: str, subject: str, body: str) -> None:
        logger.info("Mail to %s | %s\n%s", to, subject, body)
