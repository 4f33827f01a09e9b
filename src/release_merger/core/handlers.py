"""Exception handlers for the FastAPI application."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import structlog

from .exceptions import GitHubAPIError, ReleaseMergerError

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, error: str, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, **extra},
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers for the application."""

    @app.exception_handler(ReleaseMergerError)
    async def release_merger_exception_handler(request: Request, exc: ReleaseMergerError) -> JSONResponse:
        """Map release merger exceptions to their HTTP status."""
        log = logger.bind(path=request.url.path, method=request.method, error_code=exc.error_code)
        if isinstance(exc, GitHubAPIError):
            log.error("GitHub API error", error=exc.message, upstream_status=exc.upstream_status)
        elif exc.status_code >= 500:
            log.error("Release merger error", error=exc.message)
        else:
            log.warning("Request rejected", error=exc.message)

        return _error_response(
            exc.status_code,
            exc.error_code or "release_merger_error",
            exc.message,
            details=exc.details,
        )

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc) -> JSONResponse:
        """Handle unknown routes."""
        logger.warning("Resource not found", path=request.url.path, method=request.method)

        return _error_response(
            status.HTTP_404_NOT_FOUND,
            "Not Found",
            f"The requested resource {request.url.path} was not found",
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            method=request.method,
            exc_info=True,
        )

        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            "An unexpected error occurred",
        )

    logger.info("Exception handlers configured")
