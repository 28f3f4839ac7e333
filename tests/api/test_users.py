from httpx import AsyncClient

from tests.helpers import register_and_login


async def test_get_me(client: AsyncClient):
    headers = await register_and_login(client, "getme@example.com", "Get", "Me")
    res = await client.get("/api/v1/users/me", headers=headers)
    assert res.status_code == 200
    data = res.json()
    assert data["email"] == "getme@example.com"
    assert data["first_name"] == "Get"
    assert data["last_name"] == "Me"
    assert "id" in data
    assert "role" in data


async def test_patch_me_name(client: AsyncClient):
    headers = await register_and_login(client, "patchme@example.com", "Original", "Name")
    res = await client.patch(
        "/api/v1/users/me",
        json={"first_name": "New", "last_name": "Name"},
        headers=headers,
    )
    assert res.status_code == 200
    data = res.json()
    assert data["first_name"] == "New"
    assert data["last_name"] == "Name"
    assert data["email"] == "patchme@example.com"


async def test_patch_me_partial_update_preserves_other_fields(client: AsyncClient):
    headers = await register_and_login(client, "partial@example.com", "Partial", "User")
    # Set timezone first
    await client.patch("/api/v1/users/me", json={"timezone": "America/Denver"}, headers=headers)
    # Patch only first_name, timezone should be unchanged
    res = await client.patch("/api/v1/users/me", json={"first_name": "Updated"}, headers=headers)
    assert res.status_code == 200
    data = res.json()
    assert data["first_name"] == "Updated"
    assert data["timezone"] == "America/Denver"


async def test_get_me_unauthenticated(client: AsyncClient):
    res = await client.get("/api/v1/users/me")
    assert res.status_code == 401


async def test_patch_me_unauthenticated(client: AsyncClient):
    res = await client.patch("/api/v1/users/me", json={"first_name": "Hacker"})
    assert res.status_code == 401


async def test_patch_me_rejects_null_first_name(client: AsyncClient):
    headers = await register_and_login(client, "nullname@example.com", "Keep", "Me")
    res = await client.patch("/api/v1/users/me", json={"first_name": None}, headers=headers)
    assert res.status_code == 422
    res = await client.get("/api/v1/users/me", headers=headers)
    assert res.json()["first_name"] == "Keep"


async def test_patch_me_rejects_unknown_timezone(client: AsyncClient):
    headers = await register_and_login(client, "tz@example.com")
    res = await client.patch("/api/v1/users/me", json={"timezone": "Mars/Olympus_Mons"}, headers=headers)
    assert res.status_code == 422
    res = await client.patch("/api/v1/users/me", json={"timezone": None}, headers=headers)
    assert res.status_code == 200
    assert res.json()["timezone"] is None
