from abc import ABC, abstractmethod

from src.domain.entities import User


class DeliveryFailed(Exception):
    """The notification could not be handed to the mail transport"""


class INotificationSender(ABC):
    """Out-of-band delivery of verification and reset links"""

    @abstractmethod
    async def send_verification_link(self, user: User, url: str) -> None:
        """Raises DeliveryFailed if the message could not be sent"""
        pass

    @abstractmethod
    async def send_reset_link(self, email: str, token: str, url: str) -> None:
        """Raises DeliveryFailed if the message could not be sent"""
        pass
