"""FastAPI application and route handlers."""

from .routers import webhooks, health

__all__ = ["webhooks", "health"]
