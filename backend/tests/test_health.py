import pytest
from httpx import AsyncClient

from app.main import app
from app.core.database import get_db


@pytest.mark.asyncio
async def test_liveness(client: AsyncClient):
    response = await client.get("/api/v1/health/liveness")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["timestamp"].endswith("Z")


@pytest.mark.asyncio
async def test_readiness(client: AsyncClient):
    response = await client.get("/api/v1/health/readiness")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "connected"
    assert data["cache"] == "disabled"


@pytest.mark.asyncio
async def test_readiness_database_down(client: AsyncClient):
    class BrokenSession:
        async def execute(self, *args, **kwargs):
            raise ConnectionError("connection refused")

    async def broken_db():
        yield BrokenSession()

    app.dependency_overrides[get_db] = broken_db

    response = await client.get("/api/v1/health/readiness")

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "error"
    assert data["database"] == "disconnected"


@pytest.mark.asyncio
async def test_response_headers(client: AsyncClient):
    response = await client.get("/api/v1/health/liveness", headers={"X-Request-ID": "abc12345"})

    assert response.headers["X-Request-ID"] == "abc12345"
    assert response.headers["X-Response-Time"].endswith("ms")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


@pytest.mark.asyncio
async def test_root_info(client: AsyncClient):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["api"] == "/api/v1"
