"""Tests for the GitHub REST client."""

from __future__ import annotations

import json

import httpx
import pytest

from release_merger.core.exceptions import ConfigurationError, GitHubAPIError
from release_merger.models.github import ReviewEvent
from release_merger.services.github import GitHubClient


def test_client_requires_token() -> None:
    with pytest.raises(ConfigurationError):
        GitHubClient(api_token=None)


class TestRequests:
    @pytest.mark.asyncio
    async def test_requests_carry_bearer_token_and_api_headers(self, github_client, fake_github) -> None:
        await github_client.list_open_pull_requests("acme", "shop")

        request = fake_github.requests[0]
        assert request.headers["Authorization"] == "Bearer test-token"
        assert request.headers["Accept"] == "application/vnd.github+json"
        assert request.headers["X-GitHub-Api-Version"] == "2022-11-28"

    @pytest.mark.asyncio
    async def test_list_filters_open_pulls_on_base_branch(self, github_client, fake_github) -> None:
        fake_github.add_pull(1, "(release) PROJ-1")
        fake_github.add_pull(2, "(release) PROJ-2", state="closed")

        pulls = await github_client.list_open_pull_requests("acme", "shop", base="master", per_page=100)

        assert [p.number for p in pulls] == [1]
        params = fake_github.requests[0].url.params
        assert params["state"] == "open"
        assert params["base"] == "master"
        assert params["per_page"] == "100"
        assert params["page"] == "1"

    @pytest.mark.asyncio
    async def test_list_reads_only_one_page_by_default(self, github_client, fake_github) -> None:
        for number in range(1, 6):
            fake_github.add_pull(number, f"(release) PROJ-{number}")

        pulls = await github_client.list_open_pull_requests("acme", "shop", per_page=2)

        assert [p.number for p in pulls] == [1, 2]
        assert len(fake_github.requests) == 1

    @pytest.mark.asyncio
    async def test_list_follows_pages_up_to_limit(self, github_client, fake_github) -> None:
        for number in range(1, 6):
            fake_github.add_pull(number, f"(release) PROJ-{number}")

        pulls = await github_client.list_open_pull_requests("acme", "shop", per_page=2, max_pages=10)

        assert [p.number for p in pulls] == [1, 2, 3, 4, 5]
        assert len(fake_github.requests) == 3

    @pytest.mark.asyncio
    async def test_create_comment_posts_body(self, github_client, fake_github) -> None:
        comment = await github_client.create_comment("acme", "shop", 7, "hello")

        assert comment.body == "hello"
        assert fake_github.comments == [(7, "hello")]
        assert fake_github.requests[0].url.path == "/repos/acme/shop/issues/7/comments"

    @pytest.mark.asyncio
    async def test_create_review_sends_approve_event(self, github_client, fake_github) -> None:
        review = await github_client.create_review("acme", "shop", 7, ReviewEvent.APPROVE)

        assert review.state == "APPROVED"
        assert json.loads(fake_github.requests[0].content) == {"event": "APPROVE"}

    @pytest.mark.asyncio
    async def test_merge_uses_requested_method(self, github_client, fake_github) -> None:
        fake_github.add_pull(7, "(release) PROJ-7")

        merge = await github_client.merge_pull_request("acme", "shop", 7, merge_method="squash")

        assert merge.merged is True
        request = fake_github.requests[0]
        assert request.method == "PUT"
        assert json.loads(request.content) == {"merge_method": "squash"}

    @pytest.mark.asyncio
    async def test_get_pull_request_parses_state(self, github_client, fake_github) -> None:
        fake_github.add_pull(7, "(release) PROJ-7", mergeable_state=None)

        pull = await github_client.get_pull_request("acme", "shop", 7)

        assert pull.state == "open"
        assert pull.mergeable_state is None


class TestErrors:
    @pytest.mark.asyncio
    async def test_not_found_raises(self, github_client) -> None:
        with pytest.raises(GitHubAPIError) as exc_info:
            await github_client.get_pull_request("acme", "shop", 404)
        assert exc_info.value.upstream_status == 404
        assert "Resource not found" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_upstream_message_is_kept(self, github_client, fake_github) -> None:
        fake_github.failures["merge"] = 405
        with pytest.raises(GitHubAPIError) as exc_info:
            await github_client.merge_pull_request("acme", "shop", 1)
        assert exc_info.value.message == "merge failed"
        assert exc_info.value.response_data == {"message": "merge failed"}

    @pytest.mark.asyncio
    async def test_network_error_is_wrapped(self, github_client, fake_github) -> None:
        fake_github.network_failures.add("list_pulls")
        with pytest.raises(GitHubAPIError) as exc_info:
            await github_client.list_open_pull_requests("acme", "shop")
        assert exc_info.value.message.startswith("Request failed:")
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_malformed_body_raises(self, settings) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>"))
        async with GitHubClient.from_settings(settings, transport=transport) as client:
            with pytest.raises(GitHubAPIError, match="Malformed response"):
                await client.get_pull_request("acme", "shop", 1)

    @pytest.mark.asyncio
    async def test_health_check(self, github_client, fake_github) -> None:
        assert await github_client.health_check() is True
        fake_github.failures["user"] = 401
        assert await github_client.health_check() is False
