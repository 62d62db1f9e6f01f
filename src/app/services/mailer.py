from abc import ABC, abstractmethod


class MailDeliveryError(Exception):
    """Raised when the mail transport fails to deliver a message"""


class Mailer(ABC):
    """Outbound mail port used by the password reset flow"""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """False when no transport is set up (reset links are logged instead)"""
        pass

    @abstractmethod
    async def send(self, to: str, subject: str, text: str) -> None:
        """Send a plain-text message. Raises MailDeliveryError on failure."""
        pass
