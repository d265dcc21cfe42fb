import pytest

from src.app.services.authenticator import CredentialAuthenticator
from src.domain.entities import User


@pytest.mark.asyncio
async def test_authenticate_success(mock_uow, hasher):
    user = User(id=1, name="A", email="a@x.com", password_hash=hasher.hash("longenough1"))
    mock_uow.users.get_by_email.return_value = user

    result = await CredentialAuthenticator(mock_uow, hasher).authenticate("a@x.com", "longenough1")

    assert result.is_ok()
    assert result.value is user
    mock_uow.users.get_by_email.assert_called_once_with("a@x.com")


@pytest.mark.asyncio
async def test_unknown_email_and_wrong_password_are_indistinguishable(mock_uow, hasher):
    authenticator = CredentialAuthenticator(mock_uow, hasher)

    mock_uow.users.get_by_email.return_value = None
    unknown = await authenticator.authenticate("nobody@x.com", "longenough1")

    mock_uow.users.get_by_email.return_value = User(
        id=1, name="A", email="a@x.com", password_hash=hasher.hash("longenough1")
    )
    wrong = await authenticator.authenticate("a@x.com", "wrongpassword")

    assert unknown.is_err() and wrong.is_err()
    assert unknown.error == wrong.error
    assert unknown.error.code == "INVALID_CREDENTIALS"
