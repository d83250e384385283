import uuid
from typing import Any

from fastapi import status
from httpx import AsyncClient
from pytest import MonkeyPatch, mark

import cms.main
from cms.errors import DatabaseConnectionError
from cms.managers import limiter


@mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    """Test health check endpoint."""
    response = await client.get("/health")

    data = response.json()
    assert response.status_code == status.HTTP_200_OK
    assert data["status"] == "ok"
    assert data["database"] == "connected"
    assert data["version"] == cms.main.app.version
    assert "timestamp" in data


@mark.asyncio
async def test_health_check_degraded(client: AsyncClient, monkeypatch: MonkeyPatch) -> None:
    async def unreachable(*args: Any) -> None:
        raise DatabaseConnectionError

    monkeypatch.setattr(cms.main, "ping", unreachable)

    response = await client.get("/health")

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "unavailable"


@mark.asyncio
async def test_unknown_route(client: AsyncClient) -> None:
    response = await client.get("/nowhere")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Not Found"}


@mark.asyncio
async def test_method_not_allowed(client: AsyncClient) -> None:
    response = await client.patch("/posts")

    assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
    assert "error" in response.json()


@mark.asyncio
async def test_security_headers(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["Cache-Control"] == "no-store"


@mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "trace-123"})

    assert response.headers["X-Request-ID"] == "trace-123"


@mark.asyncio
async def test_request_id_is_generated(client: AsyncClient) -> None:
    first = await client.get("/health")
    second = await client.get("/health")

    assert len(first.headers["X-Request-ID"]) == 32
    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]


@mark.asyncio
async def test_ensure_user_rate_limit(client: AsyncClient, identity: Any) -> None:
    limiter.enabled = True
    headers = {"X-API-Key": str(uuid.uuid4())}
    token = identity.issue("fresh", "fresh@example.com")

    # 10 per minute allowed
    for _ in range(10):
        response = await client.post("/auth/ensure-user", json={"idToken": token}, headers=headers)
        assert response.status_code == status.HTTP_200_OK

    response = await client.post("/auth/ensure-user", json={"idToken": token}, headers=headers)
    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert response.json()["error"] == "Rate limit exceeded"
