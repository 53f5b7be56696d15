import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_options_require_session(client: AsyncClient):
    response = await client.get("/api/options/drivers")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_add_and_list_drivers(client: AsyncClient, auth_headers):
    created = await client.post(
        "/api/options/drivers",
        json={"name": " Salim Al Harthy ", "code": "D-17", "gsm": "+968 9123 4567"},
        headers=auth_headers,
    )
    await client.post("/api/options/drivers", json={"name": "Ahmed Al Balushi"}, headers=auth_headers)

    response = await client.get("/api/options/drivers", headers=auth_headers)

    assert created.status_code == 201
    assert created.json()["data"]["name"] == "Salim Al Harthy"
    assert created.json()["data"]["code"] == "D-17"
    assert [d["name"] for d in response.json()["data"]] == ["Ahmed Al Balushi", "Salim Al Harthy"]


@pytest.mark.asyncio
async def test_add_driver_requires_name(client: AsyncClient, auth_headers):
    response = await client.post("/api/options/drivers", json={"name": "  "}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Driver name is required"


@pytest.mark.asyncio
async def test_add_duplicate_vehicle(client: AsyncClient, auth_headers):
    first = await client.post("/api/options/vehicles", json={"number": "4521 AB"}, headers=auth_headers)
    second = await client.post("/api/options/vehicles", json={"number": "4521 AB"}, headers=auth_headers)

    assert first.status_code == 201
    assert first.json()["data"]["number"] == "4521 AB"
    assert second.status_code == 409


@pytest.mark.asyncio
@pytest.mark.parametrize("kind, label", [("locations", "Nizwa"), ("rest-types", "Fuel stop")])
async def test_add_and_list_named_options(client: AsyncClient, auth_headers, kind, label):
    created = await client.post(f"/api/options/{kind}", json={"name": label}, headers=auth_headers)
    response = await client.get(f"/api/options/{kind}", headers=auth_headers)

    assert created.status_code == 201
    assert [o["name"] for o in response.json()["data"]] == [label]


@pytest.mark.asyncio
async def test_add_vehicle_requires_number(client: AsyncClient, auth_headers):
    response = await client.post("/api/options/vehicles", json={}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Vehicle number is required"
