from httpx import AsyncClient

from tests.helpers import create_garden, create_plant, create_planting, register_and_login


async def test_location_crud(client: AsyncClient):
    headers = await register_and_login(client, "locations@example.com")
    garden = await create_garden(client, headers)

    res = await client.post(
        f"/api/v1/gardens/{garden['id']}/locations",
        json={"name": "Raised Bed 1", "description": "North corner"},
        headers=headers,
    )
    assert res.status_code == 201
    location = res.json()
    assert location["garden_id"] == garden["id"]

    res = await client.get(f"/api/v1/gardens/{garden['id']}/locations", headers=headers)
    assert [loc["name"] for loc in res.json()] == ["Raised Bed 1"]

    res = await client.patch(f"/api/v1/locations/{location['id']}", json={"name": "Raised Bed A"}, headers=headers)
    assert res.status_code == 200
    assert res.json()["name"] == "Raised Bed A"
    assert res.json()["description"] == "North corner"

    res = await client.delete(f"/api/v1/locations/{location['id']}", headers=headers)
    assert res.status_code == 204
    res = await client.get(f"/api/v1/locations/{location['id']}", headers=headers)
    assert res.status_code == 404


async def test_deleting_location_keeps_planting(client: AsyncClient):
    headers = await register_and_login(client, "locations@example.com")
    garden = await create_garden(client, headers)
    plant = await create_plant(client, headers)
    location = (await client.post(
        f"/api/v1/gardens/{garden['id']}/locations", json={"name": "Greenhouse"}, headers=headers
    )).json()
    planting = await create_planting(
        client, headers, garden["id"], plant["id"], location="Greenhouse", location_id=location["id"]
    )

    await client.delete(f"/api/v1/locations/{location['id']}", headers=headers)

    res = await client.get(f"/api/v1/plantings/{planting['id']}", headers=headers)
    assert res.status_code == 200
    assert res.json()["location"] == "Greenhouse"
    assert res.json()["location_id"] is None


async def test_location_hidden_from_other_users(client: AsyncClient):
    owner = await register_and_login(client, "owner@example.com")
    outsider = await register_and_login(client, "outsider@example.com")
    garden = await create_garden(client, owner)
    location = (await client.post(
        f"/api/v1/gardens/{garden['id']}/locations", json={"name": "Shed"}, headers=owner
    )).json()

    res = await client.get(f"/api/v1/locations/{location['id']}", headers=outsider)
    assert res.status_code == 404
    assert res.json()["detail"] == "Location not found"
    res = await client.get(f"/api/v1/gardens/{garden['id']}/locations", headers=outsider)
    assert res.status_code == 404


async def test_update_location_rejects_null_name(client: AsyncClient):
    headers = await register_and_login(client, "nullloc@example.com")
    garden = await create_garden(client, headers)
    location = (await client.post(
        f"/api/v1/gardens/{garden['id']}/locations", json={"name": "Cold frame"}, headers=headers
    )).json()

    res = await client.patch(f"/api/v1/locations/{location['id']}", json={"name": None}, headers=headers)
    assert res.status_code == 422
    res = await client.get(f"/api/v1/locations/{location['id']}", headers=headers)
    assert res.json()["name"] == "Cold frame"
