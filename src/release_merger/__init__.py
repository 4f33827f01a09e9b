"""Release Merger - approve and merge release pull requests from ticket transitions."""

__version__ = "0.1.0"

from .core.config import settings

__all__ = ["settings"]
