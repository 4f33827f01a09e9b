"""
GitHub API client modules.

This package provides modular GitHub REST client functionality:
- GitHubClient: Main unified client interface
- BaseClient: HTTP session management and error mapping
- PullRequestOperations: Pull request, review and merge operations
- IssueOperations: Issue comment operations
- GitHubAPIError: Exception handling (from core.exceptions)
"""

from .client import GitHubClient
from ...core.exceptions import GitHubAPIError

__all__ = ["GitHubClient", "GitHubAPIError"]
