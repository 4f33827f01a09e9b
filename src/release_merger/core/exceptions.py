"""Custom exceptions for the Release Merger."""


class ReleaseMergerError(Exception):
    """Base exception for release merger errors."""

    status_code = 500

    def __init__(self, message: str, error_code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ConfigurationError(ReleaseMergerError):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, config_key: str = None):
        super().__init__(
            message,
            error_code="CONFIGURATION_ERROR",
            details={"config_key": config_key},
        )
        self.config_key = config_key


class GitHubAPIError(ReleaseMergerError):
    """Exception raised for GitHub API and transport errors."""

    status_code = 502

    def __init__(self, message: str, upstream_status: int = None, response_data: dict = None):
        super().__init__(
            message,
            error_code="GITHUB_API_ERROR",
            details={"upstream_status": upstream_status, "response_data": response_data},
        )
        self.upstream_status = upstream_status
        self.response_data = response_data

    def with_prefix(self, prefix: str) -> "GitHubAPIError":
        """Return a copy of this error with a contextual message prefix."""
        return GitHubAPIError(
            f"{prefix}: {self.message}",
            upstream_status=self.upstream_status,
            response_data=self.response_data,
        )


class WebhookAuthenticationError(ReleaseMergerError):
    """Exception raised when a webhook call carries a wrong or missing token."""

    status_code = 401

    def __init__(self, message: str, header: str = None):
        super().__init__(
            message,
            error_code="WEBHOOK_AUTHENTICATION_ERROR",
            details={"header": header},
        )
        self.header = header
