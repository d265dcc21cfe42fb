import logging
from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.repositories.errors import RepositoryError
from src.app.services.session_manager import ISessionManager
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """Destroys the session behind a token. Unknown or missing tokens are a no-op."""

    def __init__(self, uow: UnitOfWork, session_manager: ISessionManager):
        self.uow = uow
        self.session_manager = session_manager

    async def execute(self, session_token: Optional[str]) -> Result[bool]:
        if not session_token:
            return Return.ok(False)

        async with self.uow:
            try:
                destroyed = await self.session_manager.destroy(session_token)
            except RepositoryError:
                logger.exception("Failed to revoke session")
                return Return.err(Error("INTERNAL_ERROR", "Failed to log out"))

            await self.uow.commit()

        return Return.ok(destroyed)
