import pytest

from src.app.repositories.errors import RepositoryError
from src.app.services.authenticator import CredentialAuthenticator
from src.app.use_cases.auth import LoginUseCase
from src.domain.entities import User


@pytest.fixture
def user(hasher):
    return User(id=1, name="A", email="a@x.com", password_hash=hasher.hash("longenough1"))


@pytest.mark.asyncio
async def test_successful_login(mock_uow, hasher, session_manager, user):
    mock_uow.users.get_by_email.return_value = user
    use_case = LoginUseCase(mock_uow, CredentialAuthenticator(mock_uow, hasher), session_manager)

    result = await use_case.execute("a@x.com", "longenough1")

    assert result.is_ok()
    assert result.value.user.id == 1
    assert result.value.session_token == "session-token"
    assert "password_hash" not in result.value.user.model_dump()
    session_manager.establish.assert_called_once_with(user)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_login_wrong_password(mock_uow, hasher, session_manager, user):
    mock_uow.users.get_by_email.return_value = user
    use_case = LoginUseCase(mock_uow, CredentialAuthenticator(mock_uow, hasher), session_manager)

    result = await use_case.execute("a@x.com", "WrongPassword!")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    session_manager.establish.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_login_unknown_email(mock_uow, hasher, session_manager):
    use_case = LoginUseCase(mock_uow, CredentialAuthenticator(mock_uow, hasher), session_manager)

    result = await use_case.execute("nobody@x.com", "longenough1")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    session_manager.establish.assert_not_called()


@pytest.mark.asyncio
async def test_session_failure_is_internal_error(mock_uow, hasher, session_manager, user):
    mock_uow.users.get_by_email.return_value = user
    session_manager.establish.side_effect = RepositoryError("boom")
    use_case = LoginUseCase(mock_uow, CredentialAuthenticator(mock_uow, hasher), session_manager)

    result = await use_case.execute("a@x.com", "longenough1")

    assert result.is_err()
    assert result.error.code == "INTERNAL_ERROR"
    mock_uow.commit.assert_not_called()
