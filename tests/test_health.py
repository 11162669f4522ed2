import pytest

from tests.conftest import TEST_BASE_URL, build_client


@pytest.mark.asyncio
async def test_health(upstream):
    async with build_client(upstream) as client:
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {
            "status": "running",
            "model": "test-model",
            "apiKeyConfigured": True,
            "baseURL": TEST_BASE_URL,
            "message": "API key is configured",
        }
    assert upstream.requests == []


@pytest.mark.asyncio
async def test_health_without_api_key(upstream):
    async with build_client(upstream, api_key="") as client:
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["apiKeyConfigured"] is False
        assert data["message"].startswith("WARNING")
    assert upstream.requests == []


@pytest.mark.asyncio
async def test_both_health_routes_match(upstream):
    async with build_client(upstream) as client:
        a = await client.get("/api/health")
        b = await client.get("/health")
        assert a.status_code == b.status_code == 200
        assert a.json() == b.json()


@pytest.mark.asyncio
async def test_unknown_route_uses_error_shape(upstream):
    async with build_client(upstream) as client:
        resp = await client.get("/api/nope")
        assert resp.status_code == 404
        assert "error" in resp.json()
