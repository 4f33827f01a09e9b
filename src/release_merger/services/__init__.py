"""Business services and external clients.

This module contains:
- Release workflow (release_service.py)
- Title matching rules (title_matcher.py)
- GitHub REST client (github/)

Naming convention:
- *_service.py: Business logic layer
- github/: External API integration layer
"""

from .github import GitHubClient, GitHubAPIError
from .release_service import ReleaseService
from .title_matcher import is_ticket_in_pr_title

__all__ = ["GitHubClient", "GitHubAPIError", "ReleaseService", "is_ticket_in_pr_title"]
