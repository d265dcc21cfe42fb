"""
Reset Password Use Case

Validates and consumes a password reset token.
"""

import logging
from datetime import timedelta

from src.libs.result import Error, Result, Return
from src.app.repositories.errors import RepositoryError
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.session_manager import ISessionManager
from src.app.services.tokens import hash_token, tokens_match
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import MessageResponse, ResetPasswordCommand

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for resetting a password.

    Business Rules:
    - Token is validated by hashing and comparing with the stored hash for the email
    - Token must not be older than the validity window
    - New password must be at least 8 characters
    - Password is rehashed and the user updated
    - Reset record is deleted (single-use)
    - All user sessions are revoked

    Token lifecycle: NoToken -> TokenIssued -> Consumed | Superseded | Expired.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: IPasswordHasher,
        session_manager: ISessionManager,
        token_ttl_minutes: int = 60,
    ):
        self.uow = uow
        self.hasher = hasher
        self.session_manager = session_manager
        self.token_ttl = timedelta(minutes=token_ttl_minutes)

    def _validate_password(self, password: str) -> Result[None]:
        if len(password) < 8:
            return Return.err(
                Error("VALIDATION_ERROR", "Password must be at least 8 characters long")
            )
        return Return.ok(None)

    async def execute(self, command: ResetPasswordCommand) -> Result[MessageResponse]:
        """
        Execute reset password use case.

        Errors:
            - VALIDATION_ERROR: Password does not meet requirements
            - INVALID_TOKEN: Token missing, mismatched, expired, or no such user
        """
        password_validation = self._validate_password(command.password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            reset_token = await self.uow.password_reset_tokens.get_by_email(command.email)

            if reset_token is None:
                return Return.err(_invalid_token())

            if not tokens_match(hash_token(command.token), reset_token.token_hash):
                return Return.err(_invalid_token())

            if reset_token.created_at + self.token_ttl < utcnow():
                return Return.err(_invalid_token())

            user = await self.uow.users.get_by_email(command.email)
            if user is None:
                # Unique email makes this unreachable in practice
                return Return.err(_invalid_token())

            user.password_hash = self.hasher.hash(command.password)

            try:
                await self.uow.users.update(user)
                await self.uow.password_reset_tokens.delete_by_email(command.email)
                revoked_count = await self.session_manager.destroy_all(user.id)
            except RepositoryError:
                logger.exception("Failed to reset password")
                return Return.err(Error("INTERNAL_ERROR", "Failed to reset password"))

            await self.uow.commit()

            logger.info(f"Password reset for user {user.id}, {revoked_count} sessions revoked")

        return Return.ok(
            MessageResponse(
                status="success",
                message="Your password has been reset successfully",
            )
        )


def _invalid_token() -> Error:
    return Error("INVALID_TOKEN", "This password reset token is invalid.")
