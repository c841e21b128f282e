from __future__ import annotations

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_health_endpoint_returns_service_metadata(async_client: AsyncClient) -> None:
    response = await async_client.get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["service"]
    # Status depends on whether the configured database is reachable
    assert payload["status"] in ["ok", "degraded"]
    assert "database" in payload["datastores"]
    assert response.headers["X-Request-ID"]
