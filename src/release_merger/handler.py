"""Webhook entry point triggered by issue tracker automation.

``main`` receives the JSON payload of a ticket transition and returns a
serverless-style response dict. The FastAPI route in
``api/routers/webhooks.py`` and the ``trigger`` CLI command both call it.
"""

import json
from typing import Any, Dict, Optional

import structlog
from pydantic import ValidationError

from .core.config import Settings, get_settings
from .core.exceptions import GitHubAPIError
from .models.results import OperationResult
from .models.webhook import WebhookPayload
from .services.github import GitHubClient
from .services.release_service import ReleaseService

logger = structlog.get_logger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


def build_response(status_code: int, result: OperationResult) -> Dict[str, Any]:
    """Wrap a result in the response shape expected by the webhook runtime."""
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(result.to_body()),
    }


def parse_payload(payload: Any) -> Optional[WebhookPayload]:
    """Validate the inbound payload, returning None when a field is missing."""
    if not isinstance(payload, dict):
        return None
    try:
        return WebhookPayload.model_validate(payload)
    except ValidationError as e:
        logger.info(
            "Webhook payload rejected",
            fields=sorted({str(error["loc"][0]) for error in e.errors() if error["loc"]}),
        )
        return None


async def main(
    payload: Any,
    settings: Optional[Settings] = None,
    client: Optional[GitHubClient] = None,
) -> Dict[str, Any]:
    """Approve and merge the pull request of a ticket that changed status.

    Args:
        payload: Decoded webhook JSON
        settings: Settings to use, defaults to the process settings
        client: GitHub client to use, built from settings when omitted

    Returns:
        Dict with ``statusCode``, ``headers`` and a JSON string ``body``
    """
    settings = settings or get_settings()

    webhook = parse_payload(payload)
    if webhook is None:
        return build_response(400, OperationResult.failure("Missing required data from payload"))

    log = logger.bind(
        project=webhook.project,
        ticket_key=webhook.ticket_key,
        ticket_status=webhook.ticket_status,
        repo=f"{webhook.repo_owner}/{webhook.repo_name}",
    )
    log.info("Processing ticket transition")

    owns_client = client is None
    if owns_client:
        client = GitHubClient.from_settings(settings)

    try:
        service = ReleaseService(client, settings)
        return await _run(service, webhook, log)
    except GitHubAPIError as e:
        log.error("GitHub request failed", error=e.message, upstream_status=e.upstream_status)
        return build_response(e.status_code, OperationResult.failure(e.message))
    finally:
        if owns_client:
            await client.close()


async def _run(service: ReleaseService, webhook: WebhookPayload, log) -> Dict[str, Any]:
    pull_request_result = await service.find_pull_request(
        webhook.ticket_key,
        webhook.repo_name,
        webhook.repo_owner,
    )
    if not pull_request_result.ok:
        return build_response(400, pull_request_result)

    pr_number = pull_request_result.data

    approval_result = await service.approve_pull_request(
        pr_number,
        webhook.repo_name,
        webhook.repo_owner,
        webhook.ticket_key,
        webhook.ticket_status,
    )
    if not approval_result.ok:
        return build_response(400, approval_result)

    # Merge outcome goes in the body, the status stays 200 once approved
    merge_result = await service.merge_pull_request(pr_number, webhook.repo_name, webhook.repo_owner)
    log.info("Ticket transition processed", pr_number=pr_number, merged=merge_result.ok)

    return build_response(200, merge_result)
