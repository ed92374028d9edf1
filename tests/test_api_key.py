import uuid

import pytest
from unittest.mock import patch
from httpx import AsyncClient, ASGITransport
from app.main import app


@pytest.mark.asyncio
async def test_health_no_api_key_required():
    """Health endpoint is always accessible, even with API_KEY configured."""
    with patch("app.dependencies.settings") as mock_settings:
        mock_settings.api_key = "secret123"
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_vehicle_routes_open_when_no_key_configured():
    with patch("app.dependencies.settings") as mock_settings:
        mock_settings.api_key = ""
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/vehicles")
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_missing_key_is_rejected():
    with patch("app.dependencies.settings") as mock_settings:
        mock_settings.api_key = "secret123"
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/vehicles")
        assert response.status_code == 403
        assert "API key" in response.json()["detail"]


@pytest.mark.asyncio
async def test_wrong_key_is_rejected_on_writes():
    with patch("app.dependencies.settings") as mock_settings:
        mock_settings.api_key = "secret123"
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.delete(
                "/api/vehicle/1",
                headers={"X-API-Key": "wrong-key"},
            )
        assert response.status_code == 403


@pytest.mark.asyncio
async def test_correct_key_is_accepted():
    with patch("app.dependencies.settings") as mock_settings:
        mock_settings.api_key = "secret123"
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get(
                "/api/vehicles/search",
                params={"fuel": "Petrol"},
                headers={"X-API-Key": "secret123"},
            )
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_correct_key_allows_writes():
    with patch("app.dependencies.settings") as mock_settings:
        mock_settings.api_key = "secret123"
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            headers = {"X-API-Key": "secret123"}
            created = await client.post(
                "/api/add/vehicle",
                json={
                    "name": "Honda City",
                    "fuelType": "Petrol",
                    "registrationNo": f"KA01{uuid.uuid4().hex[:8].upper()}",
                    "ownerName": "Anil",
                    "ownerAddress": "MG Road",
                    "city": "Bengaluru",
                    "state": "Karnataka",
                },
                headers=headers,
            )
            vehicle_id = created.json()["data"]["id"]
            patched = await client.patch(f"/api/vehicle/{vehicle_id}", json={"city": "Mysuru"}, headers=headers)
            deleted = await client.delete(f"/api/vehicle/{vehicle_id}", headers=headers)
            unauthorised = await client.delete(f"/api/vehicle/{vehicle_id}")

        assert created.status_code == 201
        assert patched.status_code == 200
        assert patched.json()["data"]["city"] == "Mysuru"
        assert deleted.status_code == 204
        assert unauthorised.status_code == 403
