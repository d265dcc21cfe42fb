"""
Authentication strategies.

Callers depend on IAuthenticator only, so new strategies (e.g. token based)
can be added without touching the use cases that consume them.
"""

from abc import ABC, abstractmethod

from src.libs.result import Error, Result, Return
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User


class IAuthenticator(ABC):
    @abstractmethod
    async def authenticate(self, username: str, password: str) -> Result[User]:
        pass


class CredentialAuthenticator(IAuthenticator):
    """
    Email + password strategy.

    Business Rules:
    - Unknown email and wrong password fail with the same INVALID_CREDENTIALS error
    - Password comparison is constant-time (bcrypt)
    - Must run inside an open unit of work
    """

    def __init__(self, uow: UnitOfWork, hasher: IPasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def authenticate(self, username: str, password: str) -> Result[User]:
        user = await self.uow.users.get_by_email(username)

        if user is None:
            # Keep the unknown-email path as slow as a wrong password
            self.hasher.verify_dummy(password)
            return Return.err(_invalid_credentials())

        if not self.hasher.verify(password, user.password_hash):
            return Return.err(_invalid_credentials())

        return Return.ok(user)


def _invalid_credentials() -> Error:
    return Error("INVALID_CREDENTIALS", "invalid credential")
