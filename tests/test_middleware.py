"""Middleware tests: request ID, CORS, error handling."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from moodmuse.config import get_settings
from moodmuse.middleware import setup_middleware


@pytest.mark.asyncio
async def test_request_id_generated(client: AsyncClient) -> None:
    """Request ID is auto-generated when not provided."""
    response = await client.get("/health")
    assert "x-request-id" in response.headers
    assert len(response.headers["x-request-id"]) == 36  # UUID format


@pytest.mark.asyncio
async def test_request_id_preserved(client: AsyncClient) -> None:
    """Custom request ID is echoed back in response."""
    response = await client.get("/health", headers={"X-Request-Id": "journal-abc-123"})
    assert response.headers["x-request-id"] == "journal-abc-123"


@pytest.mark.asyncio
async def test_cors_preflight(client: AsyncClient) -> None:
    """CORS preflight allows the API key header for the web client origin."""
    response = await client.options(
        "/api/v1/reflections/reply",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "X-Api-Key",
        },
    )
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert "x-api-key" in response.headers["access-control-allow-headers"].lower()


@pytest.mark.asyncio
async def test_404_returns_json(client: AsyncClient) -> None:
    """Unknown paths return 404 with JSON body."""
    response = await client.get("/nonexistent-path")
    assert response.status_code == 404
    assert response.json()["detail"] == "Not Found"
    assert response.headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_validation_error_shape(client: AsyncClient) -> None:
    """Request validation failures carry the field errors."""
    response = await client.post("/api/v1/users/alice/sessions", json={"before_mood": "high"})
    assert response.status_code == 422
    data = response.json()
    assert data["detail"] == "Validation error"
    assert data["errors"]


@pytest.mark.asyncio
async def test_500_returns_json() -> None:
    """Unhandled exceptions are turned into a JSON 500."""
    app = FastAPI()
    setup_middleware(app, get_settings())

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("kaboom")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/boom")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
