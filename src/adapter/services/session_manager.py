from datetime import timedelta
from typing import Optional

from src.app.services.session_manager import ISessionManager
from src.app.services.tokens import generate_token, hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Session, User


class RepositorySessionManager(ISessionManager):
    """Sessions persisted through the unit of work's session repository"""

    def __init__(self, uow: UnitOfWork, ttl_minutes: int = 1440):
        self.uow = uow
        self.ttl = timedelta(minutes=ttl_minutes)

    async def establish(self, user: User) -> str:
        token = generate_token()
        session = Session(
            user_id=user.id,
            token_hash=hash_token(token),
            expires_at=utcnow() + self.ttl,
        )
        await self.uow.sessions.create(session)
        return token

    async def resolve(self, token: str) -> Optional[User]:
        session = await self.uow.sessions.get_by_token_hash(hash_token(token))
        if session is None or not session.is_active(utcnow()):
            return None
        return await self.uow.users.get_by_id(session.user_id)

    async def destroy(self, token: str) -> bool:
        session = await self.uow.sessions.get_by_token_hash(hash_token(token))
        if session is None:
            return False
        return await self.uow.sessions.revoke_by_id(session.id)

    async def destroy_all(self, user_id: int) -> int:
        return await self.uow.sessions.revoke_all_by_user_id(user_id)
