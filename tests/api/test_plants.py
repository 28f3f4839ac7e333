from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.helpers import create_admin, create_garden, create_plant, create_planting, register_and_login


async def test_create_and_get_plant(client: AsyncClient):
    headers = await register_and_login(client, "plants@example.com")
    plant = await create_plant(client, headers, "Spinach - Baby", days_to_sprout=6, days_to_harvest=45)
    assert plant["category"] == "vegetable"

    res = await client.get(f"/api/v1/plants/{plant['id']}", headers=headers)
    assert res.status_code == 200
    assert res.json()["days_to_harvest"] == 45

    res = await client.get("/api/v1/plants/9999", headers=headers)
    assert res.status_code == 404


async def test_create_plant_validation(client: AsyncClient):
    headers = await register_and_login(client, "plants@example.com")
    res = await client.post("/api/v1/plants", json={
        "name": "Mystery", "category": "vegetable", "days_to_sprout": 0, "days_to_harvest": 10, "season": "Spring"
    }, headers=headers)
    assert res.status_code == 422
    res = await client.post("/api/v1/plants", json={
        "name": "Mystery", "category": "shrub", "days_to_sprout": 3, "days_to_harvest": 10, "season": "Spring"
    }, headers=headers)
    assert res.status_code == 422


async def test_list_plants_filters_and_pages(client: AsyncClient):
    headers = await register_and_login(client, "catalog@example.com")
    await create_plant(client, headers, "Tomato - Cherry", category="fruit")
    await create_plant(client, headers, "Basil - Sweet", category="herb")
    await create_plant(client, headers, "Lettuce - Romaine")

    res = await client.get("/api/v1/plants", headers=headers)
    data = res.json()
    assert data["total"] == 3
    assert [p["name"] for p in data["items"]] == ["Basil - Sweet", "Lettuce - Romaine", "Tomato - Cherry"]

    res = await client.get("/api/v1/plants", params={"category": "herb"}, headers=headers)
    assert [p["name"] for p in res.json()["items"]] == ["Basil - Sweet"]

    res = await client.get("/api/v1/plants", params={"name": "TOMATO"}, headers=headers)
    assert res.json()["total"] == 1

    res = await client.get("/api/v1/plants", params={"page": 2, "per_page": 2}, headers=headers)
    data = res.json()
    assert data["total"] == 3
    assert [p["name"] for p in data["items"]] == ["Tomato - Cherry"]


async def test_update_plant(client: AsyncClient):
    headers = await register_and_login(client, "editor@example.com")
    plant = await create_plant(client, headers)
    res = await client.patch(f"/api/v1/plants/{plant['id']}", json={"days_to_harvest": 28}, headers=headers)
    assert res.status_code == 200
    assert res.json()["days_to_harvest"] == 28
    assert res.json()["days_to_sprout"] == plant["days_to_sprout"]


async def test_delete_plant_requires_admin(client: AsyncClient, db: AsyncSession):
    user = await register_and_login(client, "user@example.com")
    admin = await create_admin(client, db, "admin@example.com")
    plant = await create_plant(client, user)

    res = await client.delete(f"/api/v1/plants/{plant['id']}", headers=user)
    assert res.status_code == 403

    res = await client.delete(f"/api/v1/plants/{plant['id']}", headers=admin)
    assert res.status_code == 204
    res = await client.get(f"/api/v1/plants/{plant['id']}", headers=user)
    assert res.status_code == 404


async def test_delete_plant_in_use(client: AsyncClient, db: AsyncSession):
    user = await register_and_login(client, "user@example.com")
    admin = await create_admin(client, db, "admin@example.com")
    garden = await create_garden(client, user)
    plant = await create_plant(client, user)
    await create_planting(client, user, garden["id"], plant["id"])

    res = await client.delete(f"/api/v1/plants/{plant['id']}", headers=admin)
    assert res.status_code == 409


async def test_growth_days_are_bounded(client: AsyncClient):
    headers = await register_and_login(client, "bounds@example.com")
    res = await client.post("/api/v1/plants", json={
        "name": "Bristlecone", "category": "fruit", "days_to_sprout": 10, "days_to_harvest": 1_000_000,
        "season": "Any",
    }, headers=headers)
    assert res.status_code == 422

    plant = await create_plant(client, headers)
    res = await client.patch(f"/api/v1/plants/{plant['id']}", json={"days_to_sprout": 999_999}, headers=headers)
    assert res.status_code == 422


async def test_update_plant_rejects_null(client: AsyncClient):
    headers = await register_and_login(client, "nulls@example.com")
    plant = await create_plant(client, headers)
    for field in ("name", "category", "season", "days_to_sprout", "days_to_harvest"):
        res = await client.patch(f"/api/v1/plants/{plant['id']}", json={field: None}, headers=headers)
        assert res.status_code == 422, field

    res = await client.patch(f"/api/v1/plants/{plant['id']}", json={"description": None}, headers=headers)
    assert res.status_code == 200
    assert res.json()["days_to_harvest"] == plant["days_to_harvest"]
