"""Structured logging setup and request logging middleware.

Request context (service, method, path) is bound through
``structlog.contextvars`` for the duration of each request, so every log
line emitted while handling it, from routers down to repositories, carries
the same fields.
"""

import logging
import sys
import time
from collections.abc import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from medagenda.config import settings


def configure_logging() -> None:
    """Configure structlog and the standard library root logger.

    ``LOG_FORMAT=json`` renders one JSON object per line with structured
    tracebacks; any other value uses the colored console renderer.
    """
    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper()),
    )
    # Requests are already logged by LoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Binds request context and logs each request with its duration."""

    def __init__(self, app, service: str):
        """Initialize middleware with the name of the service it logs for."""
        super().__init__(app)
        self.service = service

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        """
        Log request and response details.

        Args:
            request: Request object
            call_next: Next middleware in chain

        Returns:
            Response object
        """
        logger = structlog.get_logger(__name__)
        start_time = time.perf_counter()

        with structlog.contextvars.bound_contextvars(
            service=self.service,
            method=request.method,
            path=request.url.path,
        ):
            logger.info(
                "request_started",
                client=request.client.host if request.client else None,
            )

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "request_failed",
                    error=str(e),
                    duration=time.perf_counter() - start_time,
                )
                raise

            duration = time.perf_counter() - start_time
            logger.info(
                "request_completed",
                status_code=response.status_code,
                duration=duration,
            )

        response.headers["X-Process-Time"] = f"{duration:.6f}"
        return response
