import pytest
from httpx import AsyncClient


def _session_header(response) -> dict:
    return {"Cookie": f"session_id={response.cookies.get('session_id')}"}


@pytest.mark.asyncio
async def test_successful_login(client: AsyncClient, test_data):
    await client.post("/auth/register", json=test_data.get_copy("register_user"))
    client.cookies.clear()

    response = await client.post("/auth/login", json=test_data.get_copy("login_user"))

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "User login successfully"
    assert data["user"]["email"] == "a@x.com"
    assert "password" not in response.text

    me = await client.get("/auth/user", headers=_session_header(response))
    assert me.status_code == 200
    assert me.json()["email"] == "a@x.com"
    assert "password" not in me.text


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_look_the_same(client: AsyncClient, test_data):
    await client.post("/auth/register", json=test_data.get_copy("register_user"))
    client.cookies.clear()

    wrong_password = await client.post(
        "/auth/login", json={"username": "a@x.com", "password": "WrongPassword!"}
    )
    unknown_email = await client.post(
        "/auth/login", json={"username": "nobody@x.com", "password": "longenough1"}
    )

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["error"]["code"] == "INVALID_CREDENTIALS"
    assert "session_id" not in wrong_password.cookies
    assert "session_id" not in unknown_email.cookies


@pytest.mark.asyncio
async def test_current_user_requires_session(client: AsyncClient):
    response = await client.get("/auth/user")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_logout_destroys_session(client: AsyncClient, test_data):
    login = await client.post("/auth/register", json=test_data.get_copy("register_user"))
    headers = _session_header(login)

    response = await client.delete("/auth/logout", headers=headers)
    assert response.status_code == 204

    # The old cookie no longer resolves server-side
    me = await client.get("/auth/user", headers=headers)
    assert me.status_code == 401


@pytest.mark.asyncio
async def test_logout_without_session(client: AsyncClient):
    response = await client.delete("/auth/logout")

    assert response.status_code == 204
