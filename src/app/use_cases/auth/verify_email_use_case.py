"""
Verify Email Use Case

Marks an account verified from the id/hash pair of a verification link.
"""

import logging

from src.libs.result import Error, Result, Return
from src.app.repositories.errors import RepositoryError
from src.app.services.tokens import tokens_match, verification_identifier
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import VerifyEmailResponse

logger = logging.getLogger(__name__)


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Identifier must equal SHA-1 hex of the stored email
    - Unknown user (NOT_FOUND) and bad identifier (INVALID_TOKEN) end the
      same way for the caller
    - Already verified users return success without touching the timestamp
    - email_verified_at is set exactly once
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: int, identifier: str) -> Result[VerifyEmailResponse]:
        """
        Execute email verification use case.

        Args:
            user_id: User ID from the link
            identifier: Email hash from the link

        Errors:
            - NOT_FOUND: No user with that ID
            - INVALID_TOKEN: Identifier does not match the user's email
            - INTERNAL_ERROR: The verification could not be stored
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)

            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            if not tokens_match(identifier, verification_identifier(user.email)):
                return Return.err(Error("INVALID_TOKEN", "Invalid verification link"))

            if user.is_verified:
                return Return.ok(VerifyEmailResponse(user_id=user.id, already_verified=True))

            user.email_verified_at = utcnow()

            try:
                await self.uow.users.update(user)
            except RepositoryError:
                logger.exception("Failed to mark email as verified")
                return Return.err(Error("INTERNAL_ERROR", "Failed to verify email"))

            await self.uow.commit()

            return Return.ok(VerifyEmailResponse(user_id=user.id, already_verified=False))
