"""GitHub-related Pydantic models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PullRequestState(str, Enum):
    """GitHub pull request states."""
    OPEN = "open"
    CLOSED = "closed"


class MergeableState(str, Enum):
    """GitHub mergeable_state values."""
    CLEAN = "clean"
    BEHIND = "behind"
    BLOCKED = "blocked"
    DIRTY = "dirty"
    DRAFT = "draft"
    HAS_HOOKS = "has_hooks"
    UNKNOWN = "unknown"
    UNSTABLE = "unstable"


class ReviewState(str, Enum):
    """GitHub pull request review states."""
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    COMMENTED = "COMMENTED"
    DISMISSED = "DISMISSED"
    PENDING = "PENDING"


class ReviewEvent(str, Enum):
    """Events accepted when submitting a review."""
    APPROVE = "APPROVE"
    REQUEST_CHANGES = "REQUEST_CHANGES"
    COMMENT = "COMMENT"


class GitHubUser(BaseModel):
    """GitHub user model."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    login: str


class PullRequestSummary(BaseModel):
    """Entry of the open pull request listing."""
    model_config = ConfigDict(extra="ignore")

    number: int
    title: str


class PullRequest(BaseModel):
    """Single pull request as returned by the pulls endpoint."""
    model_config = ConfigDict(extra="ignore")

    number: int
    title: str
    state: str
    # GitHub computes this lazily and may return null on first read
    mergeable_state: Optional[str] = None
    mergeable: Optional[bool] = None
    merged: bool = False
    html_url: Optional[str] = None


class PullRequestReview(BaseModel):
    """Review submitted on a pull request."""
    model_config = ConfigDict(extra="ignore")

    id: int
    state: str
    body: Optional[str] = None
    user: Optional[GitHubUser] = None


class IssueComment(BaseModel):
    """Comment created on an issue or pull request."""
    model_config = ConfigDict(extra="ignore")

    id: int
    body: str
    html_url: Optional[str] = None


class MergeResponse(BaseModel):
    """Response of the merge endpoint."""
    model_config = ConfigDict(extra="ignore")

    sha: Optional[str] = None
    merged: bool = False
    message: str = Field(default="")
