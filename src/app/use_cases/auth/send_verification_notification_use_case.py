"""
Send Verification Notification Use Case

Mails a signed email verification link to the current user.
"""

import logging

from src.libs.result import Error, Result, Return
from src.api.utils.signed_url import create_verification_url
from src.app.services.notification_sender import DeliveryFailed, INotificationSender
from src.app.services.tokens import verification_identifier
from src.app.services.unit_of_work import UnitOfWork
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class SendVerificationNotificationUseCase:
    """
    Use case for issuing an email verification link.

    Business Rules:
    - Link embeds the user id and SHA-1 hex of the user's email
    - Link carries caller supplied success/failure redirect targets
    - Link is signed and expires after VERIFICATION_LINK_TTL_MINUTES
    - Delivery failure is reported as DELIVERY_FAILED
    """

    def __init__(self, uow: UnitOfWork, notifier: INotificationSender):
        self.uow = uow
        self.notifier = notifier

    async def execute(
        self, user_id: int, success_redirect: str, failed_redirect: str
    ) -> Result[MessageResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            url = create_verification_url(
                user.id,
                verification_identifier(user.email),
                success_redirect,
                failed_redirect,
            )

            try:
                await self.notifier.send_verification_link(user, url)
            except DeliveryFailed:
                logger.warning(f"Verification link delivery failed for user {user_id}")
                return Return.err(
                    Error("DELIVERY_FAILED", "Verification link could not be sent")
                )

        return Return.ok(
            MessageResponse(
                status="sent",
                message="Your email verification link has been sent",
            )
        )
