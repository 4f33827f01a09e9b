"""Application lifecycle management."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
import structlog

from .config import settings

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(
        "🚀 Starting Release Merger",
        version=settings.app_version,
        environment=settings.environment,
        debug=settings.debug,
        port=settings.port,
        github_api_url=settings.github_api_url,
        base_branch=settings.github_base_branch,
        merge_method=settings.merge_method,
    )

    if not settings.github_token:
        logger.warning("No GitHub token configured, webhook calls will fail", env="GITHUB_TOKEN")
    if not settings.webhook_secret:
        logger.warning("No webhook secret configured, webhook endpoint is unauthenticated")
    if settings.legacy_approval_truthiness:
        logger.warning("Legacy approval truthiness enabled, failed approval lookups count as approved")

    yield

    logger.info("🛑 Release Merger shutdown completed")
