"""Issue related GitHub API operations."""

from ...models.github import IssueComment
from .base_client import BaseClient


class IssueOperations(BaseClient):
    """Issue related GitHub API operations."""

    async def create_comment(self, owner: str, repo: str, issue_number: int, body: str) -> IssueComment:
        """Create a comment on an issue or pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            issue_number: Issue or pull request number
            body: Comment text

        Returns:
            The created comment
        """
        endpoint = f"/repos/{owner}/{repo}/issues/{issue_number}/comments"
        data = await self._make_request("POST", endpoint, json_data={"body": body})

        return IssueComment(**data)
