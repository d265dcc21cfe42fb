import pytest
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.password_hasher import BcryptPasswordHasher


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.get_by_token_hash = AsyncMock(return_value=None)
    uow.sessions.revoke_by_id = AsyncMock(return_value=True)
    uow.sessions.revoke_all_by_user_id = AsyncMock(return_value=0)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.upsert = AsyncMock()
    uow.password_reset_tokens.get_by_email = AsyncMock(return_value=None)
    uow.password_reset_tokens.delete_by_email = AsyncMock(return_value=True)
    return uow


@pytest.fixture(scope="session")
def hasher():
    # Minimum bcrypt cost keeps the suite fast
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def session_manager():
    manager = MagicMock()
    manager.establish = AsyncMock(return_value="session-token")
    manager.resolve = AsyncMock(return_value=None)
    manager.destroy = AsyncMock(return_value=True)
    manager.destroy_all = AsyncMock(return_value=0)
    return manager


@pytest.fixture
def notifier():
    sender = MagicMock()
    sender.send_verification_link = AsyncMock()
    sender.send_reset_link = AsyncMock()
    return sender
