"""CLI commands for Release Merger."""

import asyncio
import json
import sys
from typing import Optional

import structlog
import typer
from rich.console import Console
from rich.table import Table

from .core.config import get_settings
from .core.exceptions import ConfigurationError

app = typer.Typer(
    name="release-merger",
    help="Ticket driven pull request approval and merge CLI",
    add_completion=False,
)

console = Console()
logger = structlog.get_logger(__name__)


def _mask(secret: Optional[str]) -> str:
    if not secret:
        return "not set"
    return secret[:4] + "***" if len(secret) > 8 else "***"


@app.command()
def version():
    """Show application version."""
    console.print(f"Release Merger v{get_settings().app_version}")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host to bind"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
):
    """Start the web server."""
    import uvicorn

    from .core.logging import configure_uvicorn_logging

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"🚀 Starting Release Merger on {host}:{port}")

    uvicorn.run(
        "release_merger.main:app",
        host=host,
        port=port,
        reload=reload or settings.reload,
        log_config=configure_uvicorn_logging(),
        log_level=settings.log_level.lower(),
    )


@app.command()
def config():
    """Show current configuration."""
    settings = get_settings()

    table = Table(title="Release Merger Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug", str(settings.debug))
    table.add_row("Host", settings.host)
    table.add_row("Port", str(settings.port))

    table.add_row("GitHub API URL", settings.github_api_url)
    table.add_row("GitHub Token", _mask(settings.github_token))
    table.add_row("Base Branch", settings.github_base_branch)
    table.add_row("PR Page Size", str(settings.github_pr_page_size))
    table.add_row("Max PR Pages", str(settings.github_max_pr_pages))
    table.add_row("Merge Method", settings.merge_method)
    table.add_row("Legacy Approval Truthiness", str(settings.legacy_approval_truthiness))
    table.add_row("Webhook Secret", _mask(settings.webhook_secret))
    table.add_row("Log Level", settings.log_level)

    console.print(table)


@app.command()
def health():
    """Check that the GitHub token is accepted."""
    from .services.github import GitHubClient

    async def check_health() -> bool:
        async with GitHubClient.from_settings(get_settings()) as client:
            return await client.health_check()

    try:
        healthy = asyncio.run(check_health())
    except ConfigurationError as e:
        console.print(f"❌ {e.message}")
        sys.exit(1)

    if not healthy:
        console.print("❌ GitHub API rejected the token or is unreachable")
        sys.exit(1)
    console.print("✅ GitHub API reachable and token accepted")


@app.command()
def trigger(
    key: str = typer.Option(..., "--key", "-k", help="Ticket key, e.g. PROJ-123"),
    status: str = typer.Option(..., "--status", "-s", help="New ticket status"),
    repo: str = typer.Option(..., "--repo", help="GitHub repository name"),
    owner: str = typer.Option(..., "--owner", help="GitHub repository owner"),
    project: Optional[str] = typer.Option(None, "--project", help="Ticket project, defaults to the key prefix"),
):
    """Run the webhook once for a ticket transition."""
    from .handler import main as handle_webhook

    payload = {
        "project": project or key.split("-")[0],
        "key": key,
        "status": status,
        "github_repo_name": repo,
        "github_repo_owner": owner,
    }

    try:
        response = asyncio.run(handle_webhook(payload, settings=get_settings()))
    except ConfigurationError as e:
        console.print(f"❌ {e.message}")
        sys.exit(1)

    body = json.loads(response["body"])
    logger.info(
        "Webhook triggered from CLI",
        ticket_key=key,
        repo=f"{owner}/{repo}",
        status_code=response["statusCode"],
        ok=body.get("ok"),
    )
    style = "green" if response["statusCode"] == 200 and body.get("ok") else "red"
    console.print(f"[{style}]HTTP {response['statusCode']}: {body.get('message')}[/{style}]")
    console.print_json(data=body)

    if response["statusCode"] != 200:
        sys.exit(1)


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
