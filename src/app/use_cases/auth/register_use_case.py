import logging

from src.libs.result import Error, Result, Return
from src.app.repositories.errors import RepositoryError, UniqueConstraintViolation
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.session_manager import ISessionManager
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from .dtos import AuthenticatedResponse, RegisterCommand, to_user_info

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Reject an email that is already registered
    2. Hash password (never stored in plaintext)
    3. Create User (email_verified_at unset)
    4. Establish a session for the new user
    5. Commit transaction atomically

    Two concurrent registrations for the same email race past step 1;
    the users.email unique constraint lets exactly one of them commit.
    """

    def __init__(
        self, uow: UnitOfWork, hasher: IPasswordHasher, session_manager: ISessionManager
    ):
        self.uow = uow
        self.hasher = hasher
        self.session_manager = session_manager

    async def execute(self, command: RegisterCommand) -> Result[AuthenticatedResponse]:
        """
        Execute register use case

        Returns:
            Result[AuthenticatedResponse] with the new user and session token,
            or Error(UNIQUE_CONSTRAINT_VIOLATION) if the email is taken
        """
        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(_email_taken())

            user = User(
                name=command.name,
                email=command.email,
                password_hash=self.hasher.hash(command.password),
            )

            try:
                user = await self.uow.users.create(user)
                session_token = await self.session_manager.establish(user)
            except UniqueConstraintViolation:
                return Return.err(_email_taken())
            except RepositoryError:
                logger.exception("Failed to register user")
                return Return.err(Error("INTERNAL_ERROR", "Failed to register user"))

            await self.uow.commit()

            return Return.ok(
                AuthenticatedResponse(user=to_user_info(user), session_token=session_token)
            )


def _email_taken() -> Error:
    return Error("UNIQUE_CONSTRAINT_VIOLATION", "Email address has already been taken")
