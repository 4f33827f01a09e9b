"""Main FastAPI application entry point."""

from typing import Any, Dict

from fastapi import FastAPI
import structlog

from .core.config import settings
from .core.logging import setup_logging
from .core.lifespan import lifespan
from .core.middleware import configure_middleware
from .core.handlers import configure_exception_handlers
from .core.routes import configure_routes

# Setup logging
setup_logging()
logger = structlog.get_logger(__name__)


# Create FastAPI application
app = FastAPI(
    title="Release Merger",
    description="Approves and merges release pull requests when their ticket changes status",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment == "development" or settings.debug else None,
    redoc_url="/redoc" if settings.environment == "development" or settings.debug else None,
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT",
    },
)

# Configure application components
configure_middleware(app)
configure_exception_handlers(app)
configure_routes(app)


@app.get("/", response_model=Dict[str, Any])
async def root() -> Dict[str, Any]:
    """Root endpoint with service information."""
    return {
        "service": "Release Merger",
        "version": settings.app_version,
        "environment": settings.environment,
        "status": "running",
        "endpoints": {
            "health": "/health",
            "github_health": "/health/github",
            "webhook": "/webhooks/ticket",
            "docs": "/docs" if settings.environment == "development" or settings.debug else "disabled",
        },
        "merge": {
            "base_branch": settings.github_base_branch,
            "method": settings.merge_method,
        },
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(
        "🚀 Starting Release Merger from main",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )

    uvicorn.run(
        "release_merger.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
