"""Integration tests for the ride endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient


@pytest_asyncio.fixture
async def places(client: AsyncClient) -> dict:
    """Driver ``alice`` with two locations; returns their ids by name."""
    await client.post("/api/drivers", json={"pseudonym": "alice"})
    for name, lat, lng in (("Home", 45.764, 4.8357), ("Work", 45.7602, 4.8596)):
        await client.post(
            "/api/drivers/alice/locations",
            json={"name": name, "latitude": lat, "longitude": lng},
        )
    resp = await client.get("/api/drivers/alice/locations")
    return {loc["name"]: loc["id"] for loc in resp.json()}


def _stop(moment: str, odometer: int, location_id: int) -> dict:
    return {"moment": moment, "odometer_value": odometer, "location_id": location_id}


async def _only_ride(client: AsyncClient) -> dict:
    resp = await client.get("/api/drivers/alice/rides")
    [ride] = resp.json()
    return ride


@pytest.mark.asyncio
async def test_create_ride_under_way(client: AsyncClient, places: dict):
    resp = await client.post(
        "/api/drivers/alice/rides",
        json={"departure": _stop("2026-09-01T08:00:00Z", 1000, places["Home"])},
    )
    assert resp.status_code == 201

    ride = await _only_ride(client)
    assert ride["arrival"] is None
    assert ride["traffic_condition"] == "NORMAL"
    assert ride["comment"] is None
    assert ride["departure"]["odometer_value"] == 1000
    assert ride["departure"]["location"]["name"] == "Home"
    assert "driver" not in ride


@pytest.mark.asyncio
async def test_create_done_ride(client: AsyncClient, places: dict):
    resp = await client.post(
        "/api/drivers/alice/rides",
        json={
            "departure": _stop("2026-09-01T08:00:00Z", 1000, places["Home"]),
            "arrival": _stop("2026-09-01T08:30:00Z", 1012, places["Work"]),
            "traffic_condition": "HEAVY",
            "comment": "Accident on the bridge",
        },
    )
    assert resp.status_code == 201

    ride = await _only_ride(client)
    assert ride["arrival"]["location"]["name"] == "Work"
    assert ride["traffic_condition"] == "HEAVY"
    assert ride["comment"] == "Accident on the bridge"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "arrival_moment, arrival_odometer",
    [
        ("2026-09-01T07:59:00Z", 1012),  # arrives before leaving
        ("2026-09-01T08:30:00Z", 990),  # odometer went backwards
        ("2026-09-01T08:30:00Z", 1000),  # did not move
    ],
)
async def test_create_invalid_ride(
    client: AsyncClient, places: dict, arrival_moment, arrival_odometer
):
    resp = await client.post(
        "/api/drivers/alice/rides",
        json={
            "departure": _stop("2026-09-01T08:00:00Z", 1000, places["Home"]),
            "arrival": _stop(arrival_moment, arrival_odometer, places["Work"]),
        },
    )
    assert resp.status_code == 422
    assert (await client.get("/api/drivers/alice/rides")).json() == []


@pytest.mark.asyncio
async def test_create_ride_with_unknown_traffic_condition(client: AsyncClient, places: dict):
    resp = await client.post(
        "/api/drivers/alice/rides",
        json={
            "departure": _stop("2026-09-01T08:00:00Z", 1000, places["Home"]),
            "traffic_condition": "FOGGY",
        },
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_create_ride_without_departure(client: AsyncClient, places: dict):
    resp = await client.post("/api/drivers/alice/rides", json={"comment": "lost"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_create_ride_at_unknown_location(client: AsyncClient, places: dict):
    resp = await client.post(
        "/api/drivers/alice/rides",
        json={"departure": _stop("2026-09-01T08:00:00Z", 1000, 9999)},
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_create_ride_for_unknown_driver(client: AsyncClient, places: dict):
    resp = await client.post(
        "/api/drivers/ghost/rides",
        json={"departure": _stop("2026-09-01T08:00:00Z", 1000, places["Home"])},
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_rides_are_listed_by_departure(client: AsyncClient, places: dict):
    for moment in ("2026-09-02T08:00:00Z", "2026-09-01T08:00:00Z"):
        await client.post(
            "/api/drivers/alice/rides",
            json={"departure": _stop(moment, 1000, places["Home"])},
        )
    rides = (await client.get("/api/drivers/alice/rides")).json()
    assert [r["departure"]["moment"][:10] for r in rides] == ["2026-09-01", "2026-09-02"]


@pytest.mark.asyncio
async def test_get_ride(client: AsyncClient, places: dict):
    await client.post(
        "/api/drivers/alice/rides",
        json={"departure": _stop("2026-09-01T08:00:00Z", 1000, places["Home"])},
    )
    ride_id = (await _only_ride(client))["id"]
    resp = await client.get(f"/api/drivers/alice/rides/{ride_id}")
    assert resp.status_code == 200
    assert resp.json()["id"] == ride_id


@pytest.mark.asyncio
@pytest.mark.parametrize("identifier", ["9999", "first"])
async def test_get_unknown_ride(client: AsyncClient, places: dict, identifier):
    resp = await client.get(f"/api/drivers/alice/rides/{identifier}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_setting_the_arrival_completes_the_ride(client: AsyncClient, places: dict):
    departure = _stop("2026-09-01T08:00:00Z", 1000, places["Home"])
    await client.post("/api/drivers/alice/rides", json={"departure": departure})
    ride_id = (await _only_ride(client))["id"]

    resp = await client.put(
        f"/api/drivers/alice/rides/{ride_id}",
        json={
            "departure": departure,
            "arrival": _stop("2026-09-01T08:25:00Z", 1011, places["Work"]),
            "traffic_condition": "CALM",
        },
    )
    assert resp.status_code == 204

    ride = await _only_ride(client)
    assert ride["arrival"]["odometer_value"] == 1011
    assert ride["traffic_condition"] == "CALM"


@pytest.mark.asyncio
async def test_setting_an_earlier_arrival_is_refused(client: AsyncClient, places: dict):
    departure = _stop("2026-09-01T08:00:00Z", 1000, places["Home"])
    await client.post("/api/drivers/alice/rides", json={"departure": departure})
    ride_id = (await _only_ride(client))["id"]

    resp = await client.put(
        f"/api/drivers/alice/rides/{ride_id}",
        json={
            "departure": departure,
            "arrival": _stop("2026-09-01T07:00:00Z", 1011, places["Work"]),
        },
    )
    assert resp.status_code == 422
    assert (await _only_ride(client))["arrival"] is None


@pytest.mark.asyncio
async def test_update_unknown_ride(client: AsyncClient, places: dict):
    resp = await client.put(
        "/api/drivers/alice/rides/9999",
        json={"departure": _stop("2026-09-01T08:00:00Z", 1000, places["Home"])},
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_ride_frees_its_locations(client: AsyncClient, places: dict):
    await client.post(
        "/api/drivers/alice/rides",
        json={
            "departure": _stop("2026-09-01T08:00:00Z", 1000, places["Home"]),
            "arrival": _stop("2026-09-01T08:30:00Z", 1012, places["Work"]),
        },
    )
    ride_id = (await _only_ride(client))["id"]

    assert (await client.delete(f"/api/drivers/alice/rides/{ride_id}")).status_code == 204
    assert (await client.get(f"/api/drivers/alice/rides/{ride_id}")).status_code == 404
    resp = await client.delete(f"/api/drivers/alice/locations/{places['Work']}")
    assert resp.status_code == 204


@pytest.mark.asyncio
async def test_delete_unknown_ride(client: AsyncClient, places: dict):
    resp = await client.delete("/api/drivers/alice/rides/9999")
    assert resp.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("identifier", ["99999999999999999999", "2147483648"])
async def test_out_of_range_ride_identifier(client: AsyncClient, places: dict, identifier):
    assert (await client.get(f"/api/drivers/alice/rides/{identifier}")).status_code == 404
    assert (await client.delete(f"/api/drivers/alice/rides/{identifier}")).status_code == 404
    resp = await client.put(
        f"/api/drivers/alice/rides/{identifier}",
        json={"departure": _stop("2026-09-01T08:00:00Z", 1000, places["Home"])},
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "stop",
    [
        _stop("2026-09-01T08:00:00Z", 1000, 99999999999999999999),
        _stop("2026-09-01T08:00:00Z", 1000, 0),
        _stop("2026-09-01T08:00:00Z", 99999999999999999999, 1),
        _stop("2026-09-01T08:00:00Z", 2**31, 1),
    ],
)
async def test_out_of_range_stop_values(client: AsyncClient, places: dict, stop):
    resp = await client.post("/api/drivers/alice/rides", json={"departure": stop})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_ride_at_another_drivers_location(client: AsyncClient, places: dict):
    await client.post("/api/drivers", json={"pseudonym": "bob"})
    resp = await client.post(
        "/api/drivers/bob/rides",
        json={"departure": _stop("2026-09-01T08:00:00Z", 1000, places["Home"])},
    )
    assert resp.status_code == 404
    assert (await client.get("/api/drivers/bob/rides")).json() == []


@pytest.mark.asyncio
async def test_update_ride_to_another_drivers_location(client: AsyncClient, places: dict):
    await client.post("/api/drivers", json={"pseudonym": "bob"})
    await client.post(
        "/api/drivers/bob/locations",
        json={"name": "Home", "latitude": 48.85, "longitude": 2.35},
    )
    bob_home = (await client.get("/api/drivers/bob/locations")).json()[0]["id"]
    departure = _stop("2026-09-01T08:00:00Z", 1000, bob_home)
    await client.post("/api/drivers/bob/rides", json={"departure": departure})
    ride_id = (await client.get("/api/drivers/bob/rides")).json()[0]["id"]

    resp = await client.put(
        f"/api/drivers/bob/rides/{ride_id}",
        json={
            "departure": departure,
            "arrival": _stop("2026-09-01T09:00:00Z", 1050, places["Work"]),
        },
    )
    assert resp.status_code == 404
    ride = (await client.get(f"/api/drivers/bob/rides/{ride_id}")).json()
    assert ride["arrival"] is None
