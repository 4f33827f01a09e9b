"""Core configuration and settings."""

from .config import settings
from .exceptions import ConfigurationError, GitHubAPIError, ReleaseMergerError
from .logging import setup_logging

__all__ = ["settings", "ConfigurationError", "GitHubAPIError", "ReleaseMergerError", "setup_logging"]
