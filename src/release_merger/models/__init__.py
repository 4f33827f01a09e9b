"""Pydantic models for Release Merger."""

from .github import (
    IssueComment,
    MergeResponse,
    PullRequest,
    PullRequestReview,
    PullRequestSummary,
    ReviewEvent,
    ReviewState,
)
from .results import MatchResult, MergeDecision, OperationResult
from .webhook import WebhookPayload

__all__ = [
    "IssueComment",
    "MergeResponse",
    "PullRequest",
    "PullRequestReview",
    "PullRequestSummary",
    "ReviewEvent",
    "ReviewState",
    "MatchResult",
    "MergeDecision",
    "OperationResult",
    "WebhookPayload",
]
