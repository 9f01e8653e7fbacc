"""
Integration tests for the REST API endpoints.

The app is built with a ``TaxiApi`` driven by the step clock from
``conftest`` so timestamps in responses are predictable.
"""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from taxi.api.app import create_app
from taxi.config import Settings

ORDER_BODY = {
    "first_name": "Anna",
    "last_name": "Ivanova",
    "street": "Main St",
    "building": "5",
}


# ── Fixture ───────────────────────────────────────────────────────────


@pytest.fixture
def app(api, settings):
    return create_app(settings=settings, taxi_api=api)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _create(client: AsyncClient) -> int:
    resp = await client.post("/api/v1/orders", json=ORDER_BODY)
    assert resp.status_code == 201
    return resp.json()["id"]


# ── Tests ─────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/api/v1/admin/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_create_order_returns_201(client: AsyncClient):
    resp = await client.post("/api/v1/orders", json=ORDER_BODY)
    assert resp.status_code == 201
    data = resp.json()
    assert data["status"] == "WaitingForDriver"
    assert data["driver"]["id"] == 0
    assert data["client_name"] == {"first_name": "Anna", "last_name": "Ivanova"}
    assert data["destination"] == {"street": "", "building": ""}
    assert data["last_progress_time"] == "2024-01-01T10:00:00"


@pytest.mark.asyncio
async def test_create_order_validates_body(client: AsyncClient):
    resp = await client.post("/api/v1/orders", json={"first_name": "Anna"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_get_order_not_found(client: AsyncClient):
    resp = await client.get("/api/v1/orders/9999")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_full_ride(client: AsyncClient):
    order_id = await _create(client)

    resp = await client.post(f"/api/v1/orders/{order_id}/driver", json={"driver_id": 15})
    assert resp.status_code == 200
    assert resp.json()["status"] == "WaitingCarArrival"
    assert resp.json()["driver"]["car"]["model"] == "Lada sedan"

    resp = await client.post(f"/api/v1/orders/{order_id}/start")
    assert resp.status_code == 200
    assert resp.json()["status"] == "InProgress"

    resp = await client.post(f"/api/v1/orders/{order_id}/finish")
    data = resp.json()
    assert data["status"] == "Finished"
    assert data["is_terminal"] is True
    assert data["last_progress_time"] == data["finish_ride_time"]


@pytest.mark.asyncio
async def test_assign_twice_conflicts(client: AsyncClient):
    order_id = await _create(client)
    await client.post(f"/api/v1/orders/{order_id}/driver", json={"driver_id": 15})
    resp = await client.post(f"/api/v1/orders/{order_id}/driver", json={"driver_id": 15})
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_assign_unknown_driver(client: AsyncClient):
    order_id = await _create(client)
    resp = await client.post(f"/api/v1/orders/{order_id}/driver", json={"driver_id": 99})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Unknown driver id 99"

    resp = await client.get(f"/api/v1/orders/{order_id}")
    assert resp.json()["driver"]["id"] == 99
    assert resp.json()["status"] == "WaitingCarArrival"


@pytest.mark.asyncio
async def test_unassign_and_cancel(client: AsyncClient):
    order_id = await _create(client)
    resp = await client.delete(f"/api/v1/orders/{order_id}/driver")
    assert resp.status_code == 409

    await client.post(f"/api/v1/orders/{order_id}/driver", json={"driver_id": 15})
    resp = await client.delete(f"/api/v1/orders/{order_id}/driver")
    assert resp.status_code == 200
    assert resp.json()["status"] == "WaitingForDriver"
    assert resp.json()["driver"]["name"] == {"first_name": None, "last_name": None}

    resp = await client.post(f"/api/v1/orders/{order_id}/cancel")
    assert resp.status_code == 200
    assert resp.json()["status"] == "Canceled"


@pytest.mark.asyncio
async def test_cancel_after_start_conflicts(client: AsyncClient):
    order_id = await _create(client)
    await client.post(f"/api/v1/orders/{order_id}/driver", json={"driver_id": 15})
    await client.post(f"/api/v1/orders/{order_id}/start")
    resp = await client.post(f"/api/v1/orders/{order_id}/cancel")
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_start_and_finish_guards(client: AsyncClient):
    order_id = await _create(client)
    assert (await client.post(f"/api/v1/orders/{order_id}/start")).status_code == 409
    assert (await client.post(f"/api/v1/orders/{order_id}/finish")).status_code == 409


@pytest.mark.asyncio
async def test_update_destination_and_summary(client: AsyncClient):
    order_id = await _create(client)
    resp = await client.patch(
        f"/api/v1/orders/{order_id}/destination",
        json={"street": "Second St", "building": "10"},
    )
    assert resp.status_code == 200
    assert resp.json()["destination"] == {"street": "Second St", "building": "10"}

    resp = await client.get(f"/api/v1/orders/{order_id}/summary")
    assert resp.status_code == 200
    summary = resp.json()
    assert summary["driver"] is None
    assert "To: Second St 10" in summary["order"]


@pytest.mark.asyncio
async def test_list_orders(client: AsyncClient):
    await _create(client)
    await _create(client)
    resp = await client.get("/api/v1/admin/orders")
    assert resp.status_code == 200
    assert [o["id"] for o in resp.json()] == [1, 2]


@pytest.mark.asyncio
async def test_unsupported_status_returns_500(app, client: AsyncClient):
    order_id = await _create(client)
    app.state.orders.get_by_id(order_id).status = "Lost"
    resp = await client.get(f"/api/v1/orders/{order_id}")
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Unsupported order status Lost"


@pytest.mark.asyncio
async def test_rate_limit_comes_from_app_settings(api):
    limited = Settings(_env_file=None, rate_limit="1/minute")
    app = create_app(settings=limited, taxi_api=api)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        first = await ac.post("/api/v1/orders", json=ORDER_BODY)
        second = await ac.post("/api/v1/orders", json=ORDER_BODY)
    assert first.status_code == 201
    assert second.status_code == 429


@pytest.mark.asyncio
async def test_rate_limit_counters_are_per_app(api):
    limited = Settings(_env_file=None, rate_limit="1/minute")
    for _ in range(2):
        app = create_app(settings=limited, taxi_api=api)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            resp = await ac.post("/api/v1/orders", json=ORDER_BODY)
        assert resp.status_code == 201


@pytest.mark.asyncio
async def test_error_responses_documented(client: AsyncClient):
    schema = (await client.get("/openapi.json")).json()
    start = schema["paths"]["/api/v1/orders/{order_id}/start"]["post"]["responses"]
    assert start["409"]["content"]["application/json"]["schema"]["$ref"].endswith(
        "/ErrorResponse"
    )
    assert "404" in start
