"""Health check endpoints."""

from fastapi import APIRouter, Request, status
from pydantic import BaseModel

from medagenda.config import settings
from medagenda.database import check_database_connection

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    service: str
    version: str
    environment: str


class DetailedHealthResponse(HealthResponse):
    """Detailed health check response model."""

    database: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Basic health check",
)
async def health_check(request: Request) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns:
        Basic health status
    """
    return HealthResponse(
        status="healthy",
        service=request.app.state.service_name,
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get(
    "/health/detailed",
    response_model=DetailedHealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Detailed health check",
)
async def detailed_health_check(request: Request) -> DetailedHealthResponse:
    """
    Detailed health check including the service's own database.

    Returns:
        Detailed health status including dependencies
    """
    db_healthy = await check_database_connection(request.app.state.engine)

    return DetailedHealthResponse(
        status="healthy" if db_healthy else "degraded",
        service=request.app.state.service_name,
        version=settings.app_version,
        environment=settings.environment,
        database="healthy" if db_healthy else "unhealthy",
    )


@router.get(
    "/Ping",
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Simple ping",
)
async def ping() -> str:
    """
    Simple ping endpoint.

    Returns:
        Pong response
    """
    return "Pong"
