"""Registry service entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from medagenda.api.v1.router import registry_router
from medagenda.config import settings
from medagenda.core.application import create_application
from medagenda.database import init_registry_db, registry_engine
from medagenda.middleware.logging import configure_logging

configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the registry schema on startup and release connections on shutdown."""
    logger.info("application_startup", service="registry", environment=settings.environment)

    await init_registry_db()
    logger.info("database_initialized", url=settings.registry_database_url)

    yield

    logger.info("application_shutdown", service="registry")
    await registry_engine.dispose()
    logger.info("database_connections_closed")


app = create_application(
    service_name="registry",
    description="Registry of specialties, clinics, doctors and patients",
    router=registry_router,
    engine=registry_engine,
    lifespan=lifespan,
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "medagenda.registry_main:app",
        host=settings.host,
        port=settings.registry_port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )
