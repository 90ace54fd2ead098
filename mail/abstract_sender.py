"""Email delivery abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod


class EmailDeliveryError(Exception):
    """Raised when a message could not be handed to the mail transport."""


class EmailSender(ABC):
    """Interface for outbound mail backends."""

    @abstractmethod
    def send_mail(self, to: str, subject: str, body: str) -> None:
        """Deliver a plain-text message or raise ``EmailDeliveryError``."""
