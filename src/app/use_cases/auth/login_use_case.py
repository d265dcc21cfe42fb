"""
Login Use Case

Authenticates credentials and establishes a server-side session.
"""

import logging

from src.libs.result import Error, Result, Return
from src.app.repositories.errors import RepositoryError
from src.app.services.authenticator import IAuthenticator
from src.app.services.session_manager import ISessionManager
from src.app.services.unit_of_work import UnitOfWork
from .dtos import AuthenticatedResponse, to_user_info

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Credentials are checked by the configured authentication strategy
    - Unknown email and wrong password are indistinguishable (INVALID_CREDENTIALS)
    - A new session is created on success
    """

    def __init__(
        self,
        uow: UnitOfWork,
        authenticator: IAuthenticator,
        session_manager: ISessionManager,
    ):
        self.uow = uow
        self.authenticator = authenticator
        self.session_manager = session_manager

    async def execute(self, username: str, password: str) -> Result[AuthenticatedResponse]:
        """
        Execute login use case.

        Args:
            username: User email
            password: Plain text password

        Returns:
            Result with the authenticated user and session token, or Error
        """
        async with self.uow:
            auth_result = await self.authenticator.authenticate(username, password)
            if auth_result.is_err():
                return Return.err(auth_result.error)

            user = auth_result.value

            try:
                session_token = await self.session_manager.establish(user)
            except RepositoryError:
                logger.exception("Failed to establish session")
                return Return.err(Error("INTERNAL_ERROR", "Failed to establish session"))

            await self.uow.commit()

            return Return.ok(
                AuthenticatedResponse(user=to_user_info(user), session_token=session_token)
            )
