from functools import lru_cache
from typing import Optional

from fastapi import Depends, status
from fastapi.security import APIKeyCookie
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.notification_sender import (
    LoggingNotificationSender,
    SmtpNotificationSender,
)
from src.adapter.services.password_hasher import BcryptPasswordHasher
from src.adapter.services.session_manager import RepositorySessionManager
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.authenticator import CredentialAuthenticator, IAuthenticator
from src.app.services.notification_sender import INotificationSender
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.session_manager import ISessionManager
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import LoadCurrentUserUseCase, UserInfo

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

session_cookie = APIKeyCookie(name=ApplicationConfig.SESSION_COOKIE_NAME, auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache
def get_password_hasher() -> IPasswordHasher:
    return BcryptPasswordHasher(ApplicationConfig.BCRYPT_ROUNDS)


def get_notification_sender() -> INotificationSender:
    if ApplicationConfig.MAIL_BACKEND == "smtp":
        return SmtpNotificationSender(ApplicationConfig)
    return LoggingNotificationSender()


def get_session_manager(uow: UnitOfWork = Depends(get_unit_of_work)) -> ISessionManager:
    return RepositorySessionManager(uow, ttl_minutes=ApplicationConfig.SESSION_TTL_MINUTES)


def get_authenticator(
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
) -> IAuthenticator:
    return CredentialAuthenticator(uow, hasher)


async def get_session_token(token: Optional[str] = Depends(session_cookie)) -> Optional[str]:
    return token


async def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_manager: ISessionManager = Depends(get_session_manager),
) -> UserInfo:
    """
    Dependency resolving the session cookie to the authenticated user.

    Raises:
        ClientError: 401 if the cookie is missing or the session is dead
    """
    result = await LoadCurrentUserUseCase(uow, session_manager).execute(token)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    return result.value
