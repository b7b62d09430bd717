"""
DevConnect Backend — Application Wiring Tests
===============================================

What we test:
    ✅ Root and health endpoints
    ✅ Request ID propagation
    ✅ Per-IP rate limiting returns 429 with Retry-After
"""

import pytest
from httpx import ASGITransport, AsyncClient

from devconnect.main import create_app


class TestHealth:

    @pytest.mark.asyncio
    async def test_root(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert response.json() == {"msg": "API Running"}

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/")
        assert response.headers["X-Request-ID"]


class TestRateLimit:

    @pytest.mark.asyncio
    async def test_limit_exceeded(self, test_settings):
        limited = test_settings.model_copy(update={"rate_limit_requests": 10})
        app = create_app(limited)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            for _ in range(10):
                assert (await client.get("/")).status_code == 200
            response = await client.get("/")
            # Health probes are never limited
            health_status = (await client.get("/health")).status_code
        await app.state.database.dispose()

        assert response.status_code == 429
        assert response.json()["error"] == "rate_limit_exceeded"
        assert int(response.headers["Retry-After"]) >= 1
        assert health_status != 429
