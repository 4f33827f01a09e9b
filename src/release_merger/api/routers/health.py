"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel
import structlog

from ...core.config import get_settings
from ...core.exceptions import ConfigurationError
from ...services.github import GitHubClient

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    service: str
    timestamp: str
    version: str
    environment: str


class GitHubHealthResponse(HealthResponse):
    """GitHub connectivity response model."""
    github_api_url: str
    token_configured: bool
    token_valid: bool


def _base_fields(status: str) -> dict:
    settings = get_settings()
    return {
        "status": status,
        "service": "release-merger",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.app_version,
        "environment": settings.environment,
    }


@router.get("/", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """Basic health check endpoint for load balancers."""
    return HealthResponse(**_base_fields("healthy"))


@router.get("/github", response_model=GitHubHealthResponse, summary="GitHub token check")
async def github_health_check() -> GitHubHealthResponse:
    """Check that the configured GitHub token is accepted."""
    settings = get_settings()
    token_valid = False

    try:
        async with GitHubClient.from_settings(settings) as client:
            token_valid = await client.health_check()
    except ConfigurationError:
        logger.warning("GitHub token not configured")

    logger.info("GitHub health checked", token_valid=token_valid)
    return GitHubHealthResponse(
        **_base_fields("healthy" if token_valid else "degraded"),
        github_api_url=settings.github_api_url,
        token_configured=settings.github_token is not None,
        token_valid=token_valid,
    )
