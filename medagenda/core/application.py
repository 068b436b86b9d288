"""FastAPI application factory shared by the scheduling and registry services."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.exceptions import HTTPException as StarletteHTTPException

from medagenda.config import settings
from medagenda.core.exceptions import AppException
from medagenda.middleware.error_handler import (
    app_exception_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from medagenda.middleware.logging import LoggingMiddleware


def create_application(
    *,
    service_name: str,
    description: str,
    router: APIRouter,
    engine: AsyncEngine,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[None]],
) -> FastAPI:
    """
    Build a FastAPI application with the common middleware stack.

    Args:
        service_name: Name bound to every log line and reported by health checks
        description: OpenAPI description
        router: Service routes
        engine: Database engine used by the detailed health check
        lifespan: Startup/shutdown handler

    Returns:
        Configured application
    """
    app = FastAPI(
        title=f"{settings.app_name} {service_name}",
        version=settings.app_version,
        description=description,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.service_name = service_name
    app.state.engine = engine

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add logging middleware
    app.add_middleware(LoggingMiddleware, service=service_name)

    # Add exception handlers
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, general_exception_handler)  # type: ignore[arg-type]

    # Include API router
    app.include_router(router, prefix=settings.api_prefix)

    # Both services can live in one process; the in-progress gauge always lands in the
    # global registry, so its name carries the service
    Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=False,
        should_instrument_requests_inprogress=True,
        excluded_handlers=["/docs", "/redoc", "/openapi.json"],
        inprogress_name=f"{service_name}_http_requests_inprogress",
        inprogress_labels=True,
        registry=CollectorRegistry(),
    ).instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)

    return app
