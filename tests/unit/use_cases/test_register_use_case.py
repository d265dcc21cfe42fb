import pytest

from src.app.repositories.errors import RepositoryError, UniqueConstraintViolation
from src.app.use_cases.auth import RegisterCommand, RegisterUseCase
from src.domain.entities import User


def _command(**overrides) -> RegisterCommand:
    data = {"name": "A", "email": "a@x.com", "password": "longenough1"}
    data.update(overrides)
    return RegisterCommand(**data)


def _assign_id(user: User) -> User:
    user.id = 1
    return user


@pytest.mark.asyncio
async def test_successful_registration(mock_uow, hasher, session_manager):
    """Password is hashed, session established, transaction committed"""
    mock_uow.users.create.side_effect = _assign_id

    result = await RegisterUseCase(mock_uow, hasher, session_manager).execute(_command())

    assert result.is_ok()
    data = result.value
    assert data.session_token == "session-token"
    assert data.user.email == "a@x.com"
    assert "password" not in data.user.model_dump()
    assert "password_hash" not in data.user.model_dump()

    stored = mock_uow.users.create.call_args.args[0]
    assert stored.password_hash != "longenough1"
    assert hasher.verify("longenough1", stored.password_hash)
    assert stored.email_verified_at is None

    session_manager.establish.assert_called_once_with(stored)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_duplicate_email_rejected(mock_uow, hasher, session_manager):
    mock_uow.users.get_by_email.return_value = User(
        id=1, name="A", email="a@x.com", password_hash="x"
    )

    result = await RegisterUseCase(mock_uow, hasher, session_manager).execute(_command())

    assert result.is_err()
    assert result.error.code == "UNIQUE_CONSTRAINT_VIOLATION"
    mock_uow.users.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_registration_loses_on_unique_constraint(
    mock_uow, hasher, session_manager
):
    """The pre-check passed but the other request committed first"""
    mock_uow.users.create.side_effect = UniqueConstraintViolation("email")

    result = await RegisterUseCase(mock_uow, hasher, session_manager).execute(_command())

    assert result.is_err()
    assert result.error.code == "UNIQUE_CONSTRAINT_VIOLATION"
    session_manager.establish.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_store_failure_is_internal_error(mock_uow, hasher, session_manager):
    mock_uow.users.create.side_effect = _assign_id
    session_manager.establish.side_effect = RepositoryError("disk full")

    result = await RegisterUseCase(mock_uow, hasher, session_manager).execute(_command())

    assert result.is_err()
    assert result.error.code == "INTERNAL_ERROR"
    assert "disk full" not in result.error.message
    mock_uow.commit.assert_not_called()
