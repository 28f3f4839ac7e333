from httpx import AsyncClient

from tests.helpers import create_garden, create_plant, create_planting, register_and_login


async def _setup(client: AsyncClient, email: str = "planter@example.com"):
    headers = await register_and_login(client, email)
    garden = await create_garden(client, headers)
    plant = await create_plant(client, headers, days_to_sprout=7, days_to_harvest=60)
    return headers, garden, plant


async def test_create_planting(client: AsyncClient):
    headers, garden, plant = await _setup(client)
    planting = await create_planting(client, headers, garden["id"], plant["id"], notes="Soaked overnight")
    assert planting["status"] == "planted"
    assert planting["quantity"] == 4
    assert planting["plant"]["name"] == plant["name"]
    assert planting["expected_sprout_date"] == "2024-01-08"
    assert planting["expected_harvest_date"] == "2024-03-01"
    assert planting["notes"] == "Soaked overnight"


async def test_create_requires_location(client: AsyncClient):
    headers, garden, plant = await _setup(client)
    res = await client.post("/api/v1/plantings", json={
        "garden_id": garden["id"], "plant_id": plant["id"], "planted_date": "2024-01-01"
    }, headers=headers)
    assert res.status_code == 422


async def test_create_rejects_bad_input(client: AsyncClient):
    headers, garden, plant = await _setup(client)
    base = {"garden_id": garden["id"], "plant_id": plant["id"], "location": "Bed"}

    res = await client.post("/api/v1/plantings", json={**base, "quantity": 0}, headers=headers)
    assert res.status_code == 422
    res = await client.post("/api/v1/plantings", json={**base, "planted_date": "2024-02-30"}, headers=headers)
    assert res.status_code == 422
    res = await client.post("/api/v1/plantings", json={**base, "plant_id": 9999}, headers=headers)
    assert res.status_code == 404


async def test_create_defaults_planted_date_to_today(client: AsyncClient):
    headers, garden, plant = await _setup(client)
    res = await client.post("/api/v1/plantings", json={
        "garden_id": garden["id"], "plant_id": plant["id"], "location": "Bed"
    }, headers=headers)
    assert res.status_code == 201
    data = res.json()
    assert data["elapsed_days"] == 0
    assert data["current_status"] == "sprouting"


async def test_computed_status_follows_reference_date(client: AsyncClient):
    headers, garden, plant = await _setup(client)
    await create_planting(client, headers, garden["id"], plant["id"], planted_date="2024-01-01")
    url = f"/api/v1/gardens/{garden['id']}/plantings"

    for as_of, expected, elapsed in [
        ("2024-01-05", "sprouting", 4),
        ("2024-01-10", "growing", 9),
        ("2024-03-02", "ready", 61),
    ]:
        res = await client.get(url, params={"as_of": as_of}, headers=headers)
        assert res.status_code == 200
        data = res.json()[0]
        assert data["current_status"] == expected
        assert data["elapsed_days"] == elapsed
        assert data["status"] == "planted"


async def test_location_from_location_id(client: AsyncClient):
    headers, garden, plant = await _setup(client)
    location = (await client.post(
        f"/api/v1/gardens/{garden['id']}/locations", json={"name": "Greenhouse"}, headers=headers
    )).json()

    res = await client.post("/api/v1/plantings", json={
        "garden_id": garden["id"], "plant_id": plant["id"], "location_id": location["id"],
        "planted_date": "2024-04-01",
    }, headers=headers)
    assert res.status_code == 201
    assert res.json()["location"] == "Greenhouse"
    assert res.json()["location_id"] == location["id"]


async def test_location_from_other_garden_rejected(client: AsyncClient):
    headers, garden, plant = await _setup(client)
    other = await create_garden(client, headers, "Allotment")
    location = (await client.post(
        f"/api/v1/gardens/{other['id']}/locations", json={"name": "Plot 7"}, headers=headers
    )).json()

    res = await client.post("/api/v1/plantings", json={
        "garden_id": garden["id"], "plant_id": plant["id"], "location_id": location["id"],
    }, headers=headers)
    assert res.status_code == 404


async def test_filter_by_search_and_status(client: AsyncClient):
    headers, garden, radish = await _setup(client)
    carrot = await create_plant(client, headers, "Carrot - Nantes", days_to_sprout=12, days_to_harvest=70)
    first = await create_planting(client, headers, garden["id"], radish["id"], planted_date="2024-01-01")
    second = await create_planting(
        client, headers, garden["id"], carrot["id"], planted_date="2024-03-01", location="Patio pot"
    )
    url = f"/api/v1/gardens/{garden['id']}/plantings"

    res = await client.get(url, params={"search": "carrot"}, headers=headers)
    assert [p["id"] for p in res.json()] == [second["id"]]
    res = await client.get(url, params={"search": "raised"}, headers=headers)
    assert [p["id"] for p in res.json()] == [first["id"]]

    res = await client.get(url, params={"status": "ready", "as_of": "2024-03-05"}, headers=headers)
    assert [p["id"] for p in res.json()] == [first["id"]]
    res = await client.get(url, params={"status": "sprouting", "as_of": "2024-03-05"}, headers=headers)
    assert [p["id"] for p in res.json()] == [second["id"]]

    res = await client.get(url, params={"status": "wilting"}, headers=headers)
    assert res.status_code == 422


async def test_update_planting(client: AsyncClient):
    headers, garden, plant = await _setup(client)
    planting = await create_planting(client, headers, garden["id"], plant["id"])

    res = await client.patch(
        f"/api/v1/plantings/{planting['id']}",
        json={"planted_date": "2024-02-01", "quantity": 10},
        headers=headers,
    )
    assert res.status_code == 200
    data = res.json()
    assert data["quantity"] == 10
    assert data["expected_sprout_date"] == "2024-02-08"

    res = await client.patch(f"/api/v1/plantings/{planting['id']}", json={"location": None}, headers=headers)
    assert res.status_code == 422


async def test_delete_planting(client: AsyncClient):
    headers, garden, plant = await _setup(client)
    planting = await create_planting(client, headers, garden["id"], plant["id"])

    res = await client.delete(f"/api/v1/plantings/{planting['id']}", headers=headers)
    assert res.status_code == 204
    res = await client.get(f"/api/v1/plantings/{planting['id']}", headers=headers)
    assert res.status_code == 404


async def test_harvest(client: AsyncClient):
    headers, garden, plant = await _setup(client)
    planting = await create_planting(client, headers, garden["id"], plant["id"])
    url = f"/api/v1/plantings/{planting['id']}/harvest"

    res = await client.post(url, json={
        "harvested_date": "2024-03-03", "harvested_quantity": 20, "harvested_notes": "Crisp"
    }, headers=headers)
    assert res.status_code == 200
    data = res.json()
    assert data["status"] == "harvested"
    assert data["current_status"] == "harvested"
    assert data["harvested_date"] == "2024-03-03"
    assert data["harvested_quantity"] == 20

    res = await client.post(url, json={"harvested_quantity": 5}, headers=headers)
    assert res.status_code == 409


async def test_harvested_status_overrides_computed(client: AsyncClient):
    headers, garden, plant = await _setup(client)
    planting = await create_planting(client, headers, garden["id"], plant["id"], planted_date="2024-01-01")
    await client.post(f"/api/v1/plantings/{planting['id']}/harvest", json={"harvested_quantity": 3}, headers=headers)

    res = await client.get(
        f"/api/v1/gardens/{garden['id']}/plantings", params={"as_of": "2024-01-02"}, headers=headers
    )
    assert res.json()[0]["current_status"] == "harvested"


async def test_plantings_hidden_from_other_users(client: AsyncClient):
    headers, garden, plant = await _setup(client)
    planting = await create_planting(client, headers, garden["id"], plant["id"])
    outsider = await register_and_login(client, "outsider@example.com")

    res = await client.get(f"/api/v1/plantings/{planting['id']}", headers=outsider)
    assert res.status_code == 404
    res = await client.post(f"/api/v1/plantings/{planting['id']}/harvest", json={"harvested_quantity": 1},
                            headers=outsider)
    assert res.status_code == 404
    res = await client.post("/api/v1/plantings", json={
        "garden_id": garden["id"], "plant_id": plant["id"], "location": "Sneaky"
    }, headers=outsider)
    assert res.status_code == 404


async def test_planted_date_near_calendar_end_rejected(client: AsyncClient):
    headers, garden, plant = await _setup(client)
    res = await client.post("/api/v1/plantings", json={
        "garden_id": garden["id"], "plant_id": plant["id"], "location": "Bed", "planted_date": "9999-12-31"
    }, headers=headers)
    assert res.status_code == 422

    res = await client.get(f"/api/v1/gardens/{garden['id']}/plantings", headers=headers)
    assert res.status_code == 200
    assert res.json() == []
    res = await client.get(f"/api/v1/gardens/{garden['id']}/dashboard", headers=headers)
    assert res.status_code == 200


async def test_default_planted_date_near_calendar_end_not_written(client: AsyncClient):
    headers, garden, plant = await _setup(client)
    res = await client.post("/api/v1/plantings", params={"as_of": "9999-12-31"}, json={
        "garden_id": garden["id"], "plant_id": plant["id"], "location": "Bed"
    }, headers=headers)
    assert res.status_code == 422

    res = await client.get(f"/api/v1/gardens/{garden['id']}/plantings", headers=headers)
    assert res.json() == []


async def test_update_rejects_out_of_range_planted_date(client: AsyncClient):
    headers, garden, plant = await _setup(client)
    planting = await create_planting(client, headers, garden["id"], plant["id"])
    res = await client.patch(
        f"/api/v1/plantings/{planting['id']}", json={"planted_date": "9999-12-31"}, headers=headers
    )
    assert res.status_code == 422

    res = await client.get(f"/api/v1/plantings/{planting['id']}", headers=headers)
    assert res.json()["planted_date"] == "2024-01-01"
