"""
Tests for Conductor Monitor API

Tests REST API endpoints against the in-memory Redis double.
"""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from conductor.api import app
from conductor.routes.dependencies import get_conductor_service
from conductor.services import ConductorService


class TestConductorAPI:
    """Tests for API endpoints"""

    @pytest_asyncio.fixture
    async def client(self, service):
        """HTTP client with the service dependency overridden"""
        app.dependency_overrides[get_conductor_service] = lambda: service
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
        app.dependency_overrides.clear()

    @pytest.mark.asyncio
    async def test_root_endpoint(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["service"] == "Conductor Monitor"

    @pytest.mark.asyncio
    async def test_health_endpoint(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_health_degraded(self, failing_redis, settings):
        broken = ConductorService(failing_redis, settings)
        app.dependency_overrides[get_conductor_service] = lambda: broken
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/health")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"

    @pytest.mark.asyncio
    async def test_record_delegation(self, client):
        response = await client.post(
            "/api/v1/conductor/delegations",
            json={"agent_name": "backend", "task_description": "Build API", "metadata": {"a": 1}},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_delegations"] == 1
        assert data["agent_breakdown"] == {"backend": 1}
        assert data["meets_threshold"] is True

    @pytest.mark.asyncio
    async def test_record_delegation_requires_agent(self, client):
        response = await client.post("/api/v1/conductor/delegations", json={"agent_name": ""})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_record_direct_action_and_stats(self, client):
        await client.post(
            "/api/v1/conductor/direct-actions",
            json={"action_type": "bash", "description": "ls"},
        )
        await client.post("/api/v1/conductor/delegations", json={"agent_name": "qa"})

        response = await client.get("/api/v1/conductor/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["total_actions"] == 2
        assert data["delegation_percentage"] == "50.00"
        assert data["direct_action_breakdown"] == {"bash": 1}

    @pytest.mark.asyncio
    async def test_events_and_report(self, client):
        for i in range(3):
            await client.post(
                "/api/v1/conductor/delegations",
                json={"agent_name": "dev", "task_description": f"task {i}"},
            )

        events = (await client.get("/api/v1/conductor/events", params={"limit": 2})).json()
        report = (await client.get("/api/v1/conductor/report")).json()

        assert events["count"] == 2
        assert events["events"][0]["task"] == "task 2"
        assert report["time_periods"]["last_24h"]["delegations"] == 3
        assert len(report["recent_events"]) == 3

    @pytest.mark.asyncio
    async def test_events_limit_validation(self, client):
        response = await client.get("/api/v1/conductor/events", params={"limit": 0})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_status_is_plain_text(self, client):
        response = await client.get("/api/v1/conductor/status")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "OVERALL STATISTICS:" in response.text

    @pytest.mark.asyncio
    async def test_threshold(self, client):
        assert (await client.get("/api/v1/conductor/threshold")).json() == {"threshold": 0.95}

        response = await client.put("/api/v1/conductor/threshold", json={"threshold": 0.8})
        assert response.status_code == 200
        assert (await client.get("/api/v1/conductor/threshold")).json() == {"threshold": 0.8}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [1.5, -0.1])
    async def test_threshold_rejected(self, client, value):
        response = await client.put("/api/v1/conductor/threshold", json={"threshold": value})

        assert response.status_code == 422
        assert "between 0 and 1" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_reset_tracking(self, client):
        await client.post("/api/v1/conductor/delegations", json={"agent_name": "dev"})

        response = await client.delete("/api/v1/conductor/tracking")

        assert response.status_code == 200
        stats = (await client.get("/api/v1/conductor/stats")).json()
        assert stats["total_actions"] == 0

    @pytest.mark.asyncio
    async def test_store_unavailable_is_503(self, failing_redis, settings):
        broken = ConductorService(failing_redis, settings)
        app.dependency_overrides[get_conductor_service] = lambda: broken
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/api/v1/conductor/stats")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 503


class TestReminderAPI:
    """Tests for reminder endpoints"""

    @pytest_asyncio.fixture
    async def client(self, service):
        app.dependency_overrides[get_conductor_service] = lambda: service
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
        app.dependency_overrides.clear()

    @pytest.mark.asyncio
    async def test_check_cycle(self, client):
        results = [
            (await client.post("/api/v1/reminder/check", json={"interval": 2})).json()
            for _ in range(2)
        ]

        assert [r["should_show"] for r in results] == [False, True]
        assert [r["count"] for r in results] == [1, 2]
        assert results[1]["reminder_text"] is not None

    @pytest.mark.asyncio
    async def test_check_without_body_uses_default(self, client):
        response = await client.post("/api/v1/reminder/check")

        assert response.status_code == 200
        assert response.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_check_rejects_zero_interval(self, client):
        response = await client.post("/api/v1/reminder/check", json={"interval": 0})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_interval_and_count(self, client):
        assert (await client.get("/api/v1/reminder/interval")).json() == {"interval": 5}

        await client.put("/api/v1/reminder/interval", json={"interval": 3})
        await client.post("/api/v1/reminder/check")

        assert (await client.get("/api/v1/reminder/interval")).json() == {"interval": 3}
        assert (await client.get("/api/v1/reminder/count")).json() == {"count": 1}

        await client.delete("/api/v1/reminder/count")
        assert (await client.get("/api/v1/reminder/count")).json() == {"count": 0}

    @pytest.mark.asyncio
    async def test_set_interval_reports_stored_value(self, client, mock_redis):
        mock_redis.set = AsyncMock(side_effect=RedisConnectionError("Connection refused"))

        response = await client.put("/api/v1/reminder/interval", json={"interval": 3})

        assert response.status_code == 200
        assert response.json() == {"interval": 5}
