"""Association of ticket keys with release pull request titles."""

import re
from typing import Optional

from ..models.results import MatchResult

RELEASE_PREFIX_PATTERN = re.compile(r"^\(release\)", re.IGNORECASE | re.ASCII)


def starts_with_release(title: str) -> bool:
    """Check whether the title starts with the ``(release)`` keyword."""
    return RELEASE_PREFIX_PATTERN.match(title) is not None


def contains_ticket_key(title: str, ticket_key: str) -> Optional[str]:
    """Return the first ``PREFIX-<digits>`` token of the title, if any.

    The prefix is everything before the first ``-`` of the ticket key. A key
    without ``-`` uses the whole key as prefix, and an empty key matches any
    ``-<digits>`` run. Digits and case folding are ASCII only.
    """
    project_prefix = ticket_key.split("-")[0]
    match = re.search(rf"({re.escape(project_prefix)}-\d+)", title, re.IGNORECASE | re.ASCII)
    return match.group(1) if match else None


def is_ticket_in_pr_title(pr_title: str, ticket_key: str) -> MatchResult:
    """Check if the ticket key is referenced by a release pull request title.

    On success ``data`` holds the key exactly as written in the title.
    """
    if not starts_with_release(pr_title):
        return MatchResult(
            success=False,
            message=f"Ticket does not match required prefix (release) in pull request title {pr_title}",
        )

    matched_key = contains_ticket_key(pr_title, ticket_key)
    if matched_key is None:
        return MatchResult(
            success=False,
            message=f"No match found for ticket key {ticket_key} in pull request title {pr_title}",
        )

    # The title may reference a different ticket of the same project
    if matched_key.upper() != ticket_key.upper():
        return MatchResult(
            success=False,
            message=f"Ticket key in pull request title does not match {ticket_key}",
        )

    return MatchResult(
        success=True,
        message="Ticket key found in pull request title",
        data=matched_key,
    )
