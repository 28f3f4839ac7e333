from httpx import AsyncClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from sproutlog.models.user import User


async def register_and_login(
    client: AsyncClient,
    email: str,
    first_name: str = "Test",
    last_name: str | None = "User",
) -> dict:
    payload: dict = {"first_name": first_name, "email": email, "password": "testpass"}
    if last_name is not None:
        payload["last_name"] = last_name
    await client.post("/api/v1/auth/register", json=payload)
    login = await client.post("/api/v1/auth/login", data={
        "username": email, "password": "testpass"
    })
    return {"Authorization": f"Bearer {login.json()['access_token']}"}


async def create_admin(client: AsyncClient, db: AsyncSession, email: str) -> dict:
    await client.post("/api/v1/auth/register", json={
        "first_name": "Admin", "email": email, "password": "adminpass"
    })
    await db.execute(update(User).where(User.email == email).values(role="admin"))
    await db.commit()
    login = await client.post("/api/v1/auth/login", data={
        "username": email, "password": "adminpass"
    })
    return {"Authorization": f"Bearer {login.json()['access_token']}"}


async def create_garden(client: AsyncClient, headers: dict, name: str = "Backyard") -> dict:
    res = await client.post("/api/v1/gardens", json={"name": name}, headers=headers)
    assert res.status_code == 201
    return res.json()


async def create_plant(
    client: AsyncClient,
    headers: dict,
    name: str = "Radish - Cherry Belle",
    days_to_sprout: int = 7,
    days_to_harvest: int = 60,
    category: str = "vegetable",
) -> dict:
    res = await client.post("/api/v1/plants", json={
        "name": name,
        "category": category,
        "days_to_sprout": days_to_sprout,
        "days_to_harvest": days_to_harvest,
        "season": "Spring/Fall",
    }, headers=headers)
    assert res.status_code == 201
    return res.json()


async def create_planting(
    client: AsyncClient,
    headers: dict,
    garden_id: int,
    plant_id: int,
    planted_date: str = "2024-01-01",
    location: str = "Raised bed 1",
    **extra,
) -> dict:
    res = await client.post("/api/v1/plantings", json={
        "garden_id": garden_id,
        "plant_id": plant_id,
        "location": location,
        "planted_date": planted_date,
        "quantity": 4,
        **extra,
    }, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()
