"""Base HTTP client for GitHub API operations."""

import time
from typing import Any, Dict, Optional

import httpx
import structlog

from ...core.exceptions import ConfigurationError, GitHubAPIError
from ...core.logging import log_github_api_call

logger = structlog.get_logger(__name__)

GITHUB_API_VERSION = "2022-11-28"


class BaseClient:
    """Base HTTP client for GitHub REST API."""

    def __init__(
        self,
        api_token: Optional[str],
        base_url: str = "https://api.github.com",
        timeout: int = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize base client.

        Args:
            api_token: GitHub token sent as a bearer credential
            base_url: GitHub REST API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used to stub the API in tests
        """
        if not api_token:
            raise ConfigurationError("GitHub API token is required", config_key="github_token")

        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout
        self.transport = transport

        self._session: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> httpx.AsyncClient:
        """Ensure HTTP session is available."""
        if self._session is None or self._session.is_closed:
            headers = {
                "Authorization": f"Bearer {self.api_token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
                "User-Agent": "release-merger/1.0",
            }

            client_kwargs = {
                "base_url": self.base_url,
                "headers": headers,
                "timeout": httpx.Timeout(float(self.timeout)),
            }
            if self.transport is not None:
                client_kwargs["transport"] = self.transport

            self._session = httpx.AsyncClient(**client_kwargs)

        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.is_closed:
            await self._session.aclose()

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make a single HTTP request.

        Args:
            method: HTTP method
            endpoint: API endpoint
            params: Query parameters
            json_data: JSON request body

        Returns:
            Decoded JSON response data

        Raises:
            GitHubAPIError: When the request fails or GitHub answers non-2xx
        """
        session = await self._ensure_session()
        start_time = time.time()

        logger.debug(
            "Making GitHub API request",
            method=method,
            endpoint=endpoint,
            params=params,
        )

        try:
            response = await session.request(
                method=method,
                url=endpoint,
                params=params,
                json=json_data,
            )
        except httpx.RequestError as e:
            logger.error("GitHub API request failed", method=method, endpoint=endpoint, error=str(e))
            raise GitHubAPIError(f"Request failed: {e}") from e

        log_github_api_call(
            logger,
            method=method,
            endpoint=endpoint,
            status_code=response.status_code,
            duration_ms=round((time.time() - start_time) * 1000, 2),
        )

        if response.is_success:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                raise GitHubAPIError(
                    f"Malformed response from {endpoint}",
                    upstream_status=response.status_code,
                ) from e

        response_data = self._error_body(response)
        upstream_message = response_data.get("message") if isinstance(response_data, dict) else None

        if response.status_code == 401:
            message = "Bad credentials. Check the GitHub token."
        elif response.status_code == 403:
            message = "Access denied. Check API token permissions."
        elif response.status_code == 404:
            message = f"Resource not found: {endpoint}"
        else:
            message = upstream_message or f"GitHub API returned {response.status_code}"

        raise GitHubAPIError(
            message,
            upstream_status=response.status_code,
            response_data=response_data,
        )

    @staticmethod
    def _error_body(response: httpx.Response) -> Optional[Dict[str, Any]]:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return {"message": response.text}

    async def health_check(self) -> bool:
        """Perform health check on GitHub API.

        Returns:
            True if the token is accepted, False otherwise
        """
        try:
            await self._make_request("GET", "/user")
            return True
        except GitHubAPIError:
            return False
