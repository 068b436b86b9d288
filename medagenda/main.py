"""Scheduling service entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from medagenda.api.v1.router import scheduling_router
from medagenda.config import settings
from medagenda.core.application import create_application
from medagenda.core.registry_client import HttpRegistryClient
from medagenda.database import init_scheduling_db, scheduling_engine
from medagenda.middleware.logging import configure_logging

# Configure logging
configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    logger.info("application_startup", service="scheduling", environment=settings.environment)

    await init_scheduling_db()
    logger.info("database_initialized", url=settings.scheduling_database_url)

    app.state.registry_client = HttpRegistryClient(
        settings.registry_base_url,
        timeout=settings.registry_timeout_seconds,
    )
    logger.info("registry_client_created", base_url=settings.registry_base_url)

    yield

    # Shutdown
    logger.info("application_shutdown", service="scheduling")

    await app.state.registry_client.close()
    logger.info("registry_client_closed")

    # Close database connections
    await scheduling_engine.dispose()
    logger.info("database_connections_closed")


# Create FastAPI application
app = create_application(
    service_name="scheduling",
    description="Appointment scheduling with conflict detection",
    router=scheduling_router,
    engine=scheduling_engine,
    lifespan=lifespan,
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "medagenda.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )
