"""Ticket transition webhook endpoint."""

import hmac
from typing import Optional

from fastapi import APIRouter, Request, Response
import structlog

from ...core.config import get_settings
from ...core.exceptions import WebhookAuthenticationError
from ... import handler

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/webhooks", tags=["webhooks"])

TOKEN_HEADER = "X-Webhook-Token"


def verify_webhook_token(token: Optional[str], secret: Optional[str]) -> bool:
    """Verify the shared webhook token.

    Args:
        token: X-Webhook-Token header value
        secret: Configured webhook secret

    Returns:
        True if the token is valid or no secret is configured
    """
    if not secret:
        return True
    if not token:
        return False

    return hmac.compare_digest(token.encode("utf-8"), secret.encode("utf-8"))


@router.post(
    "/ticket",
    summary="Ticket transition webhook",
    description="""
**Approves and merges the release pull request of a ticket that changed status.**

Expected JSON body: `project`, `key`, `status`, `github_repo_name`, `github_repo_owner`.

- `400` when the payload is incomplete, no pull request matches, or approval fails
- `200` once the pull request is approved; the body tells whether it merged
- `502` when GitHub cannot be reached or answers with an error
    """,
    responses={
        200: {"description": "Pull request approved, merge outcome in body"},
        400: {"description": "Invalid payload, no matching pull request or approval failure"},
        401: {"description": "Invalid webhook token"},
        502: {"description": "GitHub API failure"},
    },
)
async def ticket_webhook(request: Request) -> Response:
    """Handle a ticket transition webhook."""
    settings = get_settings()

    if not verify_webhook_token(request.headers.get(TOKEN_HEADER), settings.webhook_secret):
        logger.warning(
            "Invalid webhook token",
            client_ip=request.client.host if request.client else None,
        )
        raise WebhookAuthenticationError("Invalid webhook token", header=TOKEN_HEADER)

    try:
        payload = await request.json()
    except ValueError:
        payload = None

    result = await handler.main(payload, settings=settings)

    return Response(
        content=result["body"],
        status_code=result["statusCode"],
        headers=result["headers"],
    )
