"""Pull request related GitHub API operations."""

from typing import List

import structlog

from ...models.github import (
    MergeResponse,
    PullRequest,
    PullRequestReview,
    PullRequestSummary,
    ReviewEvent,
)
from .base_client import BaseClient

logger = structlog.get_logger(__name__)


class PullRequestOperations(BaseClient):
    """Pull request related GitHub API operations."""

    async def list_open_pull_requests(
        self,
        owner: str,
        repo: str,
        base: str = "master",
        per_page: int = 100,
        max_pages: int = 1,
    ) -> List[PullRequestSummary]:
        """List open pull requests targeting a base branch.

        Args:
            owner: Repository owner
            repo: Repository name
            base: Base branch filter
            per_page: Page size (GitHub caps this at 100)
            max_pages: Number of pages to read at most

        Returns:
            Pull requests in listing order
        """
        endpoint = f"/repos/{owner}/{repo}/pulls"
        pull_requests: List[PullRequestSummary] = []

        for page in range(1, max_pages + 1):
            params = {"state": "open", "base": base, "per_page": per_page, "page": page}
            data = await self._make_request("GET", endpoint, params=params) or []
            pull_requests.extend(PullRequestSummary(**item) for item in data)

            if len(data) < per_page:
                break
        else:
            if max_pages > 1:
                logger.warning(
                    "Open pull request listing truncated",
                    owner=owner,
                    repo=repo,
                    max_pages=max_pages,
                    per_page=per_page,
                )

        return pull_requests

    async def get_pull_request(self, owner: str, repo: str, pull_number: int) -> PullRequest:
        """Get a single pull request."""
        endpoint = f"/repos/{owner}/{repo}/pulls/{pull_number}"
        data = await self._make_request("GET", endpoint)

        return PullRequest(**data)

    async def create_review(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        event: ReviewEvent = ReviewEvent.APPROVE,
    ) -> PullRequestReview:
        """Submit a review on a pull request."""
        endpoint = f"/repos/{owner}/{repo}/pulls/{pull_number}/reviews"
        data = await self._make_request("POST", endpoint, json_data={"event": event.value})

        return PullRequestReview(**data)

    async def list_reviews(self, owner: str, repo: str, pull_number: int) -> List[PullRequestReview]:
        """List reviews submitted on a pull request."""
        endpoint = f"/repos/{owner}/{repo}/pulls/{pull_number}/reviews"
        data = await self._make_request("GET", endpoint, params={"per_page": 100}) or []

        return [PullRequestReview(**review) for review in data]

    async def merge_pull_request(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        merge_method: str = "squash",
    ) -> MergeResponse:
        """Merge a pull request."""
        endpoint = f"/repos/{owner}/{repo}/pulls/{pull_number}/merge"
        data = await self._make_request("PUT", endpoint, json_data={"merge_method": merge_method})

        return MergeResponse(**(data or {}))
