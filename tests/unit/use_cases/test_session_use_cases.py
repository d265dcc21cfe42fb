import pytest

from src.app.repositories.errors import RepositoryError
from src.app.use_cases.auth import LoadCurrentUserUseCase, LogoutUseCase
from src.domain.entities import User


@pytest.mark.asyncio
async def test_load_current_user(mock_uow, session_manager):
    session_manager.resolve.return_value = User(
        id=3, name="A", email="a@x.com", password_hash="secret-hash"
    )

    result = await LoadCurrentUserUseCase(mock_uow, session_manager).execute("tok")

    assert result.is_ok()
    assert result.value.id == 3
    assert "secret-hash" not in result.value.model_dump_json()


@pytest.mark.asyncio
async def test_load_current_user_without_session(mock_uow, session_manager):
    missing = await LoadCurrentUserUseCase(mock_uow, session_manager).execute(None)
    dead = await LoadCurrentUserUseCase(mock_uow, session_manager).execute("stale")

    assert missing.error.code == "UNAUTHENTICATED"
    assert dead.error.code == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_logout_destroys_session(mock_uow, session_manager):
    result = await LogoutUseCase(mock_uow, session_manager).execute("tok")

    assert result.is_ok()
    session_manager.destroy.assert_called_once_with("tok")
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_logout_without_cookie_is_noop(mock_uow, session_manager):
    result = await LogoutUseCase(mock_uow, session_manager).execute(None)

    assert result.is_ok()
    assert result.value is False
    session_manager.destroy.assert_not_called()


@pytest.mark.asyncio
async def test_logout_store_failure_is_internal_error(mock_uow, session_manager):
    session_manager.destroy.side_effect = RepositoryError("database is locked")

    result = await LogoutUseCase(mock_uow, session_manager).execute("tok")

    assert result.is_err()
    assert result.error.code == "INTERNAL_ERROR"
    mock_uow.commit.assert_not_called()
