"""
Load Current User Use Case

Resolves the session cookie to the authenticated user.
"""

from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.services.session_manager import ISessionManager
from src.app.services.unit_of_work import UnitOfWork
from .dtos import UserInfo, to_user_info


class LoadCurrentUserUseCase:
    """
    Business Rules:
    - Session must exist, not be revoked and not be expired
    - User behind the session must still exist
    """

    def __init__(self, uow: UnitOfWork, session_manager: ISessionManager):
        self.uow = uow
        self.session_manager = session_manager

    async def execute(self, session_token: Optional[str]) -> Result[UserInfo]:
        if not session_token:
            return Return.err(_unauthenticated())

        async with self.uow:
            user = await self.session_manager.resolve(session_token)
            if user is None:
                return Return.err(_unauthenticated())

            return Return.ok(to_user_info(user))


def _unauthenticated() -> Error:
    return Error("UNAUTHENTICATED", "Unauthenticated")
