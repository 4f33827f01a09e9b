"""API routers for the Release Merger."""

from . import webhooks, health

__all__ = ["webhooks", "health"]
