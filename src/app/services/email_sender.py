import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    pass


class IEmailSender(ABC):
    """Outbound email transport - application layer"""

    @abstractmethod
    async def send(self, to: str, subject: str, body: str) -> None:
        """Deliver one message, raising EmailDeliveryError on failure"""
        pass


async def deliver_best_effort(sender: IEmailSender, to: str, subject: str, body: str) -> bool:
    """
    Send an email whose failure must not fail the caller.

    Returns whether delivery succeeded; never raises.
    """
    try:
        await sender.send(to, subject, body)
    except Exception:
        logger.exception(f"Email delivery to {to} failed: {subject}")
        return False
    return True
