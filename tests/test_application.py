"""Tests for the shared application setup."""

import pytest
import structlog
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from medagenda.middleware.logging import LoggingMiddleware


@pytest.mark.asyncio
async def test_both_services_serve_in_one_process(
    client: AsyncClient,
    registry_api: AsyncClient,
) -> None:
    """The scheduling and registry apps can handle requests side by side."""
    response = await client.get("/Consulta/Ping")
    assert response.status_code == 200

    response = await registry_api.get("/Ping")
    assert response.status_code == 200

    response = await registry_api.get("/Clinica/GetAll")
    assert response.status_code == 200

    response = await client.get("/Consulta/GetAll")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_each_service_exposes_its_own_metrics(
    client: AsyncClient,
    registry_api: AsyncClient,
) -> None:
    """Request counters are kept apart per service."""
    await client.get("/Consulta/Ping")

    scheduling_metrics = (await client.get("/metrics")).text
    registry_metrics = (await registry_api.get("/metrics")).text

    assert "http_requests_total" in scheduling_metrics
    assert "/Consulta/Ping" in scheduling_metrics
    assert "/Consulta/Ping" not in registry_metrics


@pytest.mark.asyncio
async def test_request_context_is_bound_for_handlers() -> None:
    """Log lines emitted while handling a request carry the service and route."""
    app = FastAPI()
    app.add_middleware(LoggingMiddleware, service="scheduling")

    @app.get("/context")
    async def context() -> dict:
        return dict(structlog.contextvars.get_contextvars())

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        response = await http.get("/context")

    assert response.status_code == 200
    assert "X-Process-Time" in response.headers
    assert response.json() == {"service": "scheduling", "method": "GET", "path": "/context"}
    assert "service" not in structlog.contextvars.get_contextvars()
