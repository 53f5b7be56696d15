import pytest
from httpx import AsyncClient

DEFAULT_PASSWORD = "Welcome123!"


@pytest.mark.asyncio
async def test_create_user_with_default_password(client: AsyncClient, admin_auth_headers):
    response = await client.post(
        "/api/users",
        json={"username": "  fieldcoord  ", "fullName": "Field Coordinator", "role": "employee"},
        headers=admin_auth_headers,
    )
    login = await client.post("/api/auth/login", json={"username": "fieldcoord", "password": DEFAULT_PASSWORD})

    assert response.status_code == 201
    data = response.json()
    assert data["defaultPassword"] == DEFAULT_PASSWORD
    assert data["user"]["username"] == "fieldcoord"
    assert data["user"]["full_name"] == "Field Coordinator"
    assert data["user"]["role"] == "user"
    assert data["user"]["must_change_password"] is True
    assert login.status_code == 200
    assert login.json()["user"]["must_change_password"] is True


@pytest.mark.asyncio
async def test_create_admin_user(client: AsyncClient, admin_auth_headers):
    response = await client.post(
        "/api/users", json={"username": "supervisor", "role": "admin"}, headers=admin_auth_headers
    )

    assert response.status_code == 201
    assert response.json()["user"]["role"] == "admin"


@pytest.mark.asyncio
@pytest.mark.parametrize("username", ["", "ab", "   ", None, 42])
async def test_create_user_with_invalid_username(client: AsyncClient, admin_auth_headers, username):
    response = await client.post("/api/users", json={"username": username}, headers=admin_auth_headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_duplicate_user(client: AsyncClient, regular_user, admin_auth_headers):
    response = await client.post("/api/users", json={"username": "driverdesk"}, headers=admin_auth_headers)

    assert response.status_code == 409
    assert response.json()["detail"] == "Username already exists"


@pytest.mark.asyncio
async def test_user_administration_requires_admin(client: AsyncClient, auth_headers):
    create = await client.post("/api/users", json={"username": "sneaky"}, headers=auth_headers)
    listing = await client.get("/api/users", headers=auth_headers)
    default_password = await client.get("/api/users/default-password", headers=auth_headers)

    assert create.status_code == 403
    assert listing.status_code == 403
    assert default_password.status_code == 403


@pytest.mark.asyncio
async def test_list_users_newest_first(client: AsyncClient, admin_auth_headers):
    await client.post("/api/users", json={"username": "first_user"}, headers=admin_auth_headers)
    await client.post("/api/users", json={"username": "second_user"}, headers=admin_auth_headers)

    response = await client.get("/api/users", headers=admin_auth_headers)

    assert response.status_code == 200
    usernames = [u["username"] for u in response.json()["users"]]
    assert usernames[:2] == ["second_user", "first_user"]
    assert "admin" in usernames


@pytest.mark.asyncio
async def test_get_default_password(client: AsyncClient, admin_auth_headers):
    response = await client.get("/api/users/default-password", headers=admin_auth_headers)

    assert response.status_code == 200
    assert response.json() == {"defaultPassword": DEFAULT_PASSWORD}


@pytest.mark.asyncio
async def test_reset_password(client: AsyncClient, regular_user, admin_auth_headers):
    user_id = regular_user.id

    response = await client.post(f"/api/users/{user_id}/reset-password", headers=admin_auth_headers)
    login = await client.post("/api/auth/login", json={"username": "driverdesk", "password": DEFAULT_PASSWORD})
    logs = await client.get("/api/logs", headers=admin_auth_headers)

    assert response.status_code == 200
    assert response.json()["user"]["must_change_password"] is True
    assert response.json()["defaultPassword"] == DEFAULT_PASSWORD
    assert login.status_code == 200
    reset_entry = next(e for e in logs.json()["data"] if e["action"] == "reset_password")
    assert reset_entry["user_name"] == "admin"
    assert reset_entry["details"] == {"target_user": "driverdesk"}


@pytest.mark.asyncio
async def test_reset_password_of_unknown_user(client: AsyncClient, admin_auth_headers):
    response = await client.post("/api/users/9999/reset-password", headers=admin_auth_headers)

    assert response.status_code == 404
