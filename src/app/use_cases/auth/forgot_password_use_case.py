"""
Forgot Password Use Case

Issues a password reset token and mails the reset link.
"""

import logging
from urllib.parse import urlencode

from src.libs.result import Error, Result, Return
from src.app.repositories.errors import RepositoryError
from src.app.services.notification_sender import DeliveryFailed, INotificationSender
from src.app.services.tokens import generate_token, hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class ForgotPasswordUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Generate cryptographically secure token (256 bits, URL-safe)
    - Store only its SHA-256 hash, keyed by email
    - A new request replaces the previous token for that email (upsert)
    - No email enumeration (same response for known and unknown emails)
    - Delivery failure is reported as DELIVERY_FAILED
    """

    def __init__(self, uow: UnitOfWork, notifier: INotificationSender, reset_url: str):
        self.uow = uow
        self.notifier = notifier
        self.reset_url = reset_url

    async def execute(self, email: str) -> Result[MessageResponse]:
        """
        Execute forgot password use case.

        Note:
            Unknown emails get the same success response, but no token is
            stored and no mail is sent.
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.ok(_sent())

            token = generate_token()

            try:
                await self.uow.password_reset_tokens.upsert(email, hash_token(token), utcnow())
            except RepositoryError:
                logger.exception("Failed to store password reset token")
                return Return.err(Error("INTERNAL_ERROR", "Failed to issue reset token"))

            await self.uow.commit()

        url = f"{self.reset_url}?{urlencode({'token': token, 'email': email})}"
        try:
            await self.notifier.send_reset_link(email, token, url)
        except DeliveryFailed:
            logger.warning("Password reset link delivery failed")
            return Return.err(Error("DELIVERY_FAILED", "Password reset link could not be sent"))

        return Return.ok(_sent())


def _sent() -> MessageResponse:
    return MessageResponse(status="sent", message="password reset link has been sent")
