"""Tests for the /health and /metrics endpoints."""

import pytest
from httpx import AsyncClient
from redis.asyncio import Redis

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


class TestHealth:
    async def test_degraded_without_temporal(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "degraded"
        assert body["database"] == "healthy"
        assert body["temporal"].startswith("unhealthy")
        assert body["redis"] == "not_configured"
        assert body["cached"] is False

    async def test_second_call_is_cached(self, client: AsyncClient):
        await client.get("/health")

        response = await client.get("/health")

        assert response.json()["cached"] is True
        assert "cache_age_seconds" in response.json()

    async def test_healthy_with_every_dependency(
        self, client: AsyncClient, mock_redis: Redis, monkeypatch: pytest.MonkeyPatch
    ):
        async def _connected():
            return object()

        monkeypatch.setattr("src.crm.core.health.get_temporal_client", _connected)

        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["redis"] == "healthy"

    async def test_no_auth_required(self, client: AsyncClient):
        response = await client.get("/health", headers={"Authorization": "Bearer junk"})

        assert response.status_code in (200, 503)


class TestMetrics:
    async def test_metrics_exposed(self, client: AsyncClient):
        await client.get("/health")

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "http_request" in response.text
