"""Release service: locate, approve and merge the pull request of a ticket.

Every step returns an ``OperationResult`` for business outcomes. Steps that
talk to GitHub fall in two groups:

- ``find_pull_request``, ``can_merge_pull_request`` and ``merge_pull_request``
  re-raise transport failures as ``GitHubAPIError`` with a contextual prefix.
- ``post_comment``, ``approve_pull_request`` and
  ``has_pull_request_been_approved`` absorb them into failed results.
"""

from typing import Optional

import structlog

from ..core.config import Settings, settings as default_settings
from ..core.exceptions import GitHubAPIError
from ..models.github import MergeableState, PullRequestState, ReviewEvent, ReviewState
from ..models.results import MergeDecision, OperationResult
from .github import GitHubClient
from .title_matcher import is_ticket_in_pr_title

logger = structlog.get_logger(__name__)

NOT_MERGEABLE_MESSAGE = "This pull request cannot be merged because it does not meet the requirements."


class ReleaseService:
    """Drives one ticket transition through the pull request workflow."""

    def __init__(self, client: GitHubClient, settings: Optional[Settings] = None):
        self.client = client
        self.settings = settings or default_settings

    async def find_pull_request(self, ticket_key: str, repo_name: str, repo_owner: str) -> OperationResult:
        """Find the open release pull request referencing the ticket key.

        The first pull request in listing order wins. Its title key must equal
        ``ticket_key`` exactly, on top of the case-insensitive title match.

        Returns:
            Result whose ``data`` is the pull request number

        Raises:
            GitHubAPIError: When the pull requests cannot be listed
        """
        try:
            pull_requests = await self.client.list_open_pull_requests(
                repo_owner,
                repo_name,
                base=self.settings.github_base_branch,
                per_page=self.settings.github_pr_page_size,
                max_pages=self.settings.github_max_pr_pages,
            )
        except GitHubAPIError as e:
            raise e.with_prefix("Failed to find pull request") from e

        for pull_request in pull_requests:
            match = is_ticket_in_pr_title(pull_request.title, ticket_key)
            if match.success and match.data == ticket_key:
                logger.info(
                    "Pull request found for ticket",
                    ticket_key=ticket_key,
                    repo=f"{repo_owner}/{repo_name}",
                    pr_number=pull_request.number,
                )
                return OperationResult.success(
                    f"Pull request found for ticket key {ticket_key}",
                    data=pull_request.number,
                )
            logger.debug(
                "Pull request skipped",
                pr_number=pull_request.number,
                reason=match.message,
            )

        logger.info(
            "No pull request found for ticket",
            ticket_key=ticket_key,
            repo=f"{repo_owner}/{repo_name}",
            scanned=len(pull_requests),
        )
        return OperationResult.failure(f"No pull request found for ticket key {ticket_key}")

    async def post_comment(self, pr_number: int, repo_name: str, repo_owner: str, text: str) -> OperationResult:
        """Post a comment on the pull request."""
        try:
            comment = await self.client.create_comment(repo_owner, repo_name, pr_number, text)
        except GitHubAPIError as e:
            logger.warning("Failed to post comment", pr_number=pr_number, error=e.message)
            return OperationResult.failure(f"Failed to post comment on pull request: {e.message}")

        return OperationResult.success("Comment posted successfully", data=comment)

    async def approve_pull_request(
        self,
        pr_number: int,
        repo_name: str,
        repo_owner: str,
        ticket_key: str,
        ticket_status: str,
    ) -> OperationResult:
        """Comment the ticket transition on the pull request, then approve it.

        A failed comment does not prevent the approval.
        """
        comment_result = await self.post_comment(
            pr_number,
            repo_name,
            repo_owner,
            f"Ticket {ticket_key} has been moved to {ticket_status}.",
        )
        if not comment_result.ok:
            logger.warning(
                "Approving pull request without transition comment",
                pr_number=pr_number,
                reason=comment_result.message,
            )

        try:
            review = await self.client.create_review(repo_owner, repo_name, pr_number, ReviewEvent.APPROVE)
        except GitHubAPIError as e:
            logger.warning("Failed to approve pull request", pr_number=pr_number, error=e.message)
            return OperationResult.failure(f"Failed to approve pull request: {e.message}")

        logger.info("Pull request approved", pr_number=pr_number, ticket_key=ticket_key)
        return OperationResult.success("Pull request successfully approved", data=review)

    async def has_pull_request_been_approved(self, pr_number: int, repo_name: str, repo_owner: str) -> OperationResult:
        """Check that at least one review on the pull request approves it."""
        try:
            reviews = await self.client.list_reviews(repo_owner, repo_name, pr_number)
        except GitHubAPIError as e:
            return OperationResult.failure(f"Failed to check pull request approval: {e.message}")

        if not any(review.state == ReviewState.APPROVED.value for review in reviews):
            return OperationResult.failure("pull request has not been approved")

        return OperationResult.success("pull request has been approved")

    async def can_merge_pull_request(self, pr_number: int, repo_name: str, repo_owner: str) -> MergeDecision:
        """Decide whether the pull request may be merged.

        Checks run in order and the first failing one decides: mergeable
        state is ``clean``, state is ``open``, an approving review exists.

        Raises:
            GitHubAPIError: When the pull request cannot be fetched
        """
        try:
            pull_request = await self.client.get_pull_request(repo_owner, repo_name, pr_number)
        except GitHubAPIError as e:
            raise e.with_prefix("Failed to check pull request") from e

        if pull_request.mergeable_state != MergeableState.CLEAN.value:
            return MergeDecision(status=False, message=NOT_MERGEABLE_MESSAGE)

        if pull_request.state != PullRequestState.OPEN.value:
            return MergeDecision(status=False, message="Pull Request is not OPEN and cannot be merged.")

        approval = await self.has_pull_request_been_approved(pr_number, repo_name, repo_owner)
        if self.settings.legacy_approval_truthiness:
            # Any lookup result counts as approved, failed lookups included
            approved = approval is not None
        else:
            approved = approval.ok
        if not approved:
            return MergeDecision(status=False, message="Pull request has not been approved yet.")

        return MergeDecision(status=True, message="pull request is ready to merge")

    async def merge_pull_request(self, pr_number: int, repo_name: str, repo_owner: str) -> OperationResult:
        """Merge the pull request if it passes the mergeability check.

        A rejected check is reported on the pull request as a comment.

        Raises:
            GitHubAPIError: When the check or the merge call fails in transport
        """
        try:
            decision = await self.can_merge_pull_request(pr_number, repo_name, repo_owner)

            if not decision.status:
                logger.info("Pull request not mergeable", pr_number=pr_number, reason=decision.message)
                await self.post_comment(pr_number, repo_name, repo_owner, NOT_MERGEABLE_MESSAGE)
                return OperationResult.failure(decision.message)

            merge = await self.client.merge_pull_request(
                repo_owner,
                repo_name,
                pr_number,
                merge_method=self.settings.merge_method,
            )
        except GitHubAPIError as e:
            raise e.with_prefix("Failed to merge pull request") from e

        if merge.merged:
            logger.info("Pull request merged", pr_number=pr_number, sha=merge.sha)
            return OperationResult.success("Pull request successfully merged", data=merge)

        logger.warning("Pull request merge rejected", pr_number=pr_number, upstream_message=merge.message)
        return OperationResult.failure("Pull Request could not merge for unknown reason.", data=merge)
