"""Shared test fixtures for release-merger."""

from __future__ import annotations

import json
import re
from typing import Any

import httpx
import pytest
import pytest_asyncio

from release_merger.core.config import Settings
from release_merger.services.github import GitHubClient

OWNER = "acme"
REPO = "shop"

_PULL_PATH = re.compile(r"^/repos/(?P<owner>[^/]+)/(?P<repo>[^/]+)/pulls/(?P<number>\d+)(?P<rest>/reviews|/merge)?$")
_COMMENT_PATH = re.compile(r"^/repos/(?P<owner>[^/]+)/(?P<repo>[^/]+)/issues/(?P<number>\d+)/comments$")
_LIST_PATH = re.compile(r"^/repos/(?P<owner>[^/]+)/(?P<repo>[^/]+)/pulls$")


def make_pull(number: int, title: str, **kwargs: Any) -> dict[str, Any]:
    pull = {
        "number": number,
        "title": title,
        "state": "open",
        "mergeable_state": "clean",
        "merged": False,
        "html_url": f"https://github.com/{OWNER}/{REPO}/pull/{number}",
    }
    pull.update(kwargs)
    return pull


class FakeGitHub:
    """In-memory stand-in for the GitHub REST endpoints used by the service."""

    def __init__(self) -> None:
        self.pulls: dict[int, dict[str, Any]] = {}
        self.reviews: dict[int, list[dict[str, Any]]] = {}
        self.comments: list[tuple[int, str]] = []
        self.requests: list[httpx.Request] = []
        self.failures: dict[str, int] = {}
        self.network_failures: set[str] = set()
        self.merge_rejected = False

    def add_pull(self, number: int, title: str, **kwargs: Any) -> None:
        self.pulls[number] = make_pull(number, title, **kwargs)

    def _fail(self, route: str, request: httpx.Request) -> httpx.Response | None:
        if route in self.network_failures:
            raise httpx.ConnectError("connection refused", request=request)
        if route in self.failures:
            return httpx.Response(self.failures[route], json={"message": f"{route} failed"})
        return None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/user":
            failure = self._fail("user", request)
            return failure if failure is not None else httpx.Response(200, json={"login": "release-bot"})

        if _LIST_PATH.match(path) and request.method == "GET":
            failure = self._fail("list_pulls", request)
            if failure is not None:
                return failure
            page = int(request.url.params.get("page", "1"))
            per_page = int(request.url.params.get("per_page", "30"))
            open_pulls = [
                {"number": p["number"], "title": p["title"]}
                for p in self.pulls.values()
                if p["state"] == "open" and request.url.params.get("state") == "open"
            ]
            return httpx.Response(200, json=open_pulls[(page - 1) * per_page:page * per_page])

        match = _COMMENT_PATH.match(path)
        if match and request.method == "POST":
            failure = self._fail("create_comment", request)
            if failure is not None:
                return failure
            body = json.loads(request.content)["body"]
            self.comments.append((int(match["number"]), body))
            return httpx.Response(201, json={"id": len(self.comments), "body": body})

        match = _PULL_PATH.match(path)
        if match:
            number = int(match["number"])
            rest = match["rest"]
            if rest is None and request.method == "GET":
                failure = self._fail("get_pull", request)
                if failure is not None:
                    return failure
                if number not in self.pulls:
                    return httpx.Response(404, json={"message": "Not Found"})
                return httpx.Response(200, json=self.pulls[number])
            if rest == "/reviews" and request.method == "GET":
                failure = self._fail("list_reviews", request)
                if failure is not None:
                    return failure
                return httpx.Response(200, json=self.reviews.get(number, []))
            if rest == "/reviews" and request.method == "POST":
                failure = self._fail("create_review", request)
                if failure is not None:
                    return failure
                event = json.loads(request.content)["event"]
                review = {"id": 100 + len(self.reviews.get(number, [])), "state": "APPROVED" if event == "APPROVE" else event}
                self.reviews.setdefault(number, []).append(review)
                return httpx.Response(200, json=review)
            if rest == "/merge" and request.method == "PUT":
                failure = self._fail("merge", request)
                if failure is not None:
                    return failure
                if self.merge_rejected:
                    return httpx.Response(200, json={"sha": None, "merged": False, "message": "Merge rejected"})
                self.pulls[number].update(state="closed", merged=True, mergeable_state="unknown")
                return httpx.Response(200, json={"sha": "6dcb09b", "merged": True, "message": "Pull Request successfully merged"})

        return httpx.Response(404, json={"message": "Not Found"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, github_token="test-token", webhook_secret=None)


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest_asyncio.fixture
async def github_client(fake_github: FakeGitHub, settings: Settings):
    client = GitHubClient.from_settings(settings, transport=fake_github.transport())
    yield client
    await client.close()


@pytest.fixture
def payload() -> dict[str, str]:
    return {
        "project": "PROJ",
        "key": "PROJ-123",
        "status": "Ready for Release",
        "github_repo_name": REPO,
        "github_repo_owner": OWNER,
    }
