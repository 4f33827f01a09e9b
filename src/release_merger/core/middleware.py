"""FastAPI middleware configuration."""

import time
import uuid

from fastapi import FastAPI, Request
import structlog

logger = structlog.get_logger(__name__)


def add_custom_middleware(app: FastAPI) -> None:
    """Add custom middleware to the application."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log requests and tag them with an id and timing headers."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start_time = time.time()

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            logger.debug(
                "Request started",
                method=request.method,
                url=str(request.url),
            )

            response = await call_next(request)

            process_time = time.time() - start_time
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = str(process_time)

            logger.info(
                "Request completed",
                method=request.method,
                url=str(request.url),
                status_code=response.status_code,
                process_time=round(process_time, 4),
            )
            return response
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

    logger.info("Custom middleware configured")


def configure_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application."""
    add_custom_middleware(app)
