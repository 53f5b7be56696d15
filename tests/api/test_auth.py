import pytest
from httpx import AsyncClient

ADMIN_PASSWORD = "adminpassword123"
USER_PASSWORD = "userpassword123"

COOKIE = "jp_session"


async def login(client: AsyncClient, username: str, password: str):
    return await client.post("/api/auth/login", json={"username": username, "password": password})


def bearer_from_cookie(response) -> dict[str, str]:
    return {"Authorization": f"Bearer {response.cookies[COOKIE]}"}


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, regular_user):
    response = await login(client, "driverdesk", USER_PASSWORD)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user"]["username"] == "driverdesk"
    assert data["user"]["role"] == "user"
    assert data["user"]["last_login"] is not None
    assert "password_hash" not in data["user"]
    assert COOKIE in response.cookies


@pytest.mark.asyncio
async def test_login_requires_username_and_password(client: AsyncClient, regular_user):
    response = await client.post("/api/auth/login", json={"username": "driverdesk"})

    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("username, password", [("driverdesk", "wrongpassword"), ("nobody", USER_PASSWORD)])
async def test_login_invalid_credentials(client: AsyncClient, regular_user, username, password):
    response = await login(client, username, password)

    assert response.status_code == 401
    assert COOKIE not in response.cookies


@pytest.mark.asyncio
async def test_me_with_session_cookie_token(client: AsyncClient, regular_user):
    login_response = await login(client, "driverdesk", USER_PASSWORD)

    response = await client.get("/api/auth/me", headers=bearer_from_cookie(login_response))

    assert response.status_code == 200
    assert response.json()["user"]["username"] == "driverdesk"
    assert COOKIE in response.cookies


@pytest.mark.asyncio
async def test_unauthorized_access(client: AsyncClient):
    response = await client.get("/api/auth/me")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_invalid_token_is_unauthorized(client: AsyncClient):
    response = await client.get("/api/auth/me", headers={"Authorization": "Bearer nonsense"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_clears_cookie_and_is_audited(client: AsyncClient, auth_headers, admin_auth_headers):
    response = await client.post("/api/auth/logout", headers=auth_headers)
    logs = await client.get("/api/logs", headers=admin_auth_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert f'{COOKIE}=""' in response.headers["set-cookie"]
    assert logs.json()["data"][0]["action"] == "logout"


@pytest.mark.asyncio
async def test_logout_without_session_still_succeeds(client: AsyncClient):
    response = await client.post("/api/auth/logout")

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_change_own_password(client: AsyncClient, regular_user, auth_headers):
    response = await client.post(
        "/api/auth/change-password",
        json={"currentPassword": USER_PASSWORD, "newPassword": "brandnewpass"},
        headers=auth_headers,
    )
    relogin = await login(client, "driverdesk", "brandnewpass")

    assert response.status_code == 200
    assert response.json()["user"]["must_change_password"] is False
    assert COOKIE in response.cookies
    assert relogin.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body, status_code",
    [
        ({"newPassword": "brandnewpass"}, 400),
        ({"currentPassword": USER_PASSWORD, "newPassword": "short"}, 400),
        ({"currentPassword": USER_PASSWORD}, 400),
        ({"currentPassword": "wrongpassword", "newPassword": "brandnewpass"}, 401),
    ],
)
async def test_change_own_password_rejections(client: AsyncClient, auth_headers, body, status_code):
    response = await client.post("/api/auth/change-password", json=body, headers=auth_headers)

    assert response.status_code == status_code


@pytest.mark.asyncio
async def test_regular_user_cannot_change_other_password(client: AsyncClient, admin_user, auth_headers):
    response = await client.post(
        "/api/auth/change-password",
        json={"username": "admin", "newPassword": "takeover123"},
        headers=auth_headers,
    )

    # The target is ignored for non-admins; their own current password is required
    assert response.status_code == 400
    assert (await login(client, "admin", ADMIN_PASSWORD)).status_code == 200


@pytest.mark.asyncio
async def test_admin_changes_other_users_password(client: AsyncClient, regular_user, admin_auth_headers):
    response = await client.post(
        "/api/auth/change-password",
        json={"username": "driverdesk", "newPassword": "assigned123"},
        headers=admin_auth_headers,
    )
    relogin = await login(client, "driverdesk", "assigned123")

    assert response.status_code == 200
    assert response.json()["user"]["username"] == "driverdesk"
    assert response.json()["user"]["must_change_password"] is True
    # The admin keeps their own session
    assert COOKIE not in response.cookies
    assert relogin.status_code == 200


@pytest.mark.asyncio
async def test_admin_changes_password_of_unknown_user(client: AsyncClient, admin_auth_headers):
    response = await client.post(
        "/api/auth/change-password",
        json={"username": "ghost", "newPassword": "assigned123"},
        headers=admin_auth_headers,
    )

    assert response.status_code == 404
