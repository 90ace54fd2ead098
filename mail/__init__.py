"""Outbound mail backends."""

from collections.abc import Mapping

from .abstract_sender import EmailDeliveryError, EmailSender
from .log_sender import LogEmailSender
from .smtp_sender import SmtpEmailSender

__all__ = [
    "EmailDeliveryError",
    "EmailSender",
    "LogEmailSender",
    "SmtpEmailSender",
    "build_email_sender",
]


def build_email_sender(config: Mapping) -> EmailSender:
    """Return the SMTP backend when ``MAIL_SERVER`` is set, else the log backend."""

    host = config.get("MAIL_SERVER")
    if not host:
        return LogEmailSender()
    return SmtpEmailSender(
        host,
        int(config.get("MAIL_PORT", 587)),
        sender=config.get("MAIL_DEFAULT_SENDER") or config.get("MAIL_USERNAME"),
        username=config.get("MAIL_USERNAME") or None,
        password=config.get("MAIL_PASSWORD") or None,
        use_tls=bool(config.get("MAIL_USE_TLS", True)),
        timeout=float(config.get("MAIL_TIMEOUT", 10)),
    )
