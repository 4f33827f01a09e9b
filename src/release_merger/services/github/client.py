"""Unified GitHub API client combining all operations."""

from typing import List, Optional

import httpx

from ...core.config import Settings
from ...models.github import (
    IssueComment,
    MergeResponse,
    PullRequest,
    PullRequestReview,
    PullRequestSummary,
    ReviewEvent,
)
from .base_client import BaseClient
from .issues import IssueOperations
from .pulls import PullRequestOperations


class GitHubClient(BaseClient):
    """Unified GitHub API client with all operations."""

    def __init__(
        self,
        api_token: Optional[str],
        base_url: str = "https://api.github.com",
        timeout: int = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize GitHub client.

        Args:
            api_token: GitHub token
            base_url: GitHub REST API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport shared by all operations
        """
        super().__init__(api_token, base_url, timeout, transport)

        self._pulls = PullRequestOperations(api_token, base_url, timeout, transport)
        self._issues = IssueOperations(api_token, base_url, timeout, transport)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "GitHubClient":
        """Build a client from explicit settings."""
        return cls(
            api_token=settings.github_token,
            base_url=settings.github_api_url,
            timeout=settings.github_api_timeout,
            transport=transport,
        )

    # Delegate pull request operations
    async def list_open_pull_requests(
        self, owner: str, repo: str, base: str = "master", per_page: int = 100, max_pages: int = 1
    ) -> List[PullRequestSummary]:
        """List open pull requests."""
        return await self._pulls.list_open_pull_requests(owner, repo, base, per_page, max_pages)

    async def get_pull_request(self, owner: str, repo: str, pull_number: int) -> PullRequest:
        """Get pull request."""
        return await self._pulls.get_pull_request(owner, repo, pull_number)

    async def create_review(
        self, owner: str, repo: str, pull_number: int, event: ReviewEvent = ReviewEvent.APPROVE
    ) -> PullRequestReview:
        """Submit a review."""
        return await self._pulls.create_review(owner, repo, pull_number, event)

    async def list_reviews(self, owner: str, repo: str, pull_number: int) -> List[PullRequestReview]:
        """List reviews."""
        return await self._pulls.list_reviews(owner, repo, pull_number)

    async def merge_pull_request(
        self, owner: str, repo: str, pull_number: int, merge_method: str = "squash"
    ) -> MergeResponse:
        """Merge pull request."""
        return await self._pulls.merge_pull_request(owner, repo, pull_number, merge_method)

    # Delegate issue operations
    async def create_comment(self, owner: str, repo: str, issue_number: int, body: str) -> IssueComment:
        """Comment on an issue or pull request."""
        return await self._issues.create_comment(owner, repo, issue_number, body)

    async def close(self):
        """Close all HTTP sessions."""
        await super().close()
        await self._pulls.close()
        await self._issues.close()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
