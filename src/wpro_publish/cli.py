"""CLI interface for wpro-publish."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError
from pydantic_settings import SettingsError
from rich.console import Console
from rich.table import Table

from .config import Settings, load_settings, redact_token
from .document import load_document
from .errors import ConfigurationError, PublishError
from .logging_utils import setup_logging
from .publisher import PublishResult, run_publish

app = typer.Typer(
    name="wpro-publish",
    help="Publish page component prototypes to the WPRO API",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

USAGE = "No YAML file path provided. Usage: wpro-publish publish <path-to-yaml-file>"


def get_settings(org: str | None = None, api_url: str | None = None) -> Settings:
    """Load configuration from environment and CLI overrides."""
    try:
        return load_settings(org=org, api_url=api_url)
    except (ValidationError, SettingsError) as e:
        err_console.print(f"[red]Error loading configuration: {e}[/red]")
        raise typer.Exit(ConfigurationError.exit_code) from None


def run_async(coro: Any) -> Any:
    """Run an async function synchronously."""
    return asyncio.run(coro)


def _display_result(result: PublishResult) -> None:
    table = Table(title=f"Component {result.group_id}")
    table.add_column("Step", style="cyan")
    table.add_column("Status")

    if result.dry_run:
        table.add_row("Component upload", "[yellow]dry run[/yellow]")
        table.add_row("Service publish", "[yellow]dry run[/yellow]")
    else:
        if result.success and result.upload is not None:
            upload_status = f"[green]✓ {result.upload.value}[/green]"
        else:
            upload_status = "[red]✗ failed (POST and PUT)[/red]"
        table.add_row("Component upload", upload_status)
        service_status = (
            "[green]✓ published[/green]" if result.service_published else "[yellow]not confirmed[/yellow]"
        )
        table.add_row("Service publish", service_status)

    console.print(table)


@app.command()
def publish(
    file: Annotated[
        Path | None,
        typer.Argument(help="Path to the component YAML file", show_default=False),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Validate and show requests without sending them"),
    ] = False,
    org: Annotated[
        str | None,
        typer.Option("--org", help="Organization to publish to (default: WPRO_ORG)"),
    ] = None,
    api_url: Annotated[
        str | None,
        typer.Option("--api-url", help="API base URL (default: WPRO_API_URL)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Also write logs to this file"),
    ] = None,
) -> None:
    """Upload a component and publish the service."""
    if file is None:
        err_console.print(USAGE)
        raise typer.Exit(1)

    settings = get_settings(org, api_url)
    try:
        setup_logging(console, verbose=verbose, token=settings.access_token, log_file=log_file)
    except OSError as e:
        err_console.print(f"[red]Error opening log file {log_file}: {e}[/red]")
        raise typer.Exit(ConfigurationError.exit_code) from None

    try:
        result = run_async(run_publish(settings, file, dry_run=dry_run))
    except PublishError as e:
        logger.error(f"Error during component upload: {e}")
        raise typer.Exit(e.exit_code) from None

    _display_result(result)


@app.command()
def validate(
    file: Annotated[Path, typer.Argument(help="Path to the component YAML file")],
    org: Annotated[
        str | None,
        typer.Option("--org", help="Organization to publish to (default: WPRO_ORG)"),
    ] = None,
    api_url: Annotated[
        str | None,
        typer.Option("--api-url", help="API base URL (default: WPRO_API_URL)"),
    ] = None,
) -> None:
    """Check a component file without contacting the API."""
    settings = get_settings(org, api_url)
    try:
        document = load_document(file)
    except PublishError as e:
        err_console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(e.exit_code) from None

    table = Table(title="Component")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("groupId", document.group_id)
    table.add_row("type", settings.component_type)
    table.add_row("settings", ", ".join(sorted(str(k) for k in document.settings)) or "-")
    table.add_row("POST", settings.prototype_resource or "[red]not configured[/red]")
    if settings.prototype_resource:
        table.add_row("PUT fallback", settings.component_url(document.group_id))
    console.print(table)
    console.print("[green]✓ Component file is valid[/green]")


@app.command()
def config_show(
    org: Annotated[
        str | None,
        typer.Option("--org", help="Organization to publish to (default: WPRO_ORG)"),
    ] = None,
    api_url: Annotated[
        str | None,
        typer.Option("--api-url", help="API base URL (default: WPRO_API_URL)"),
    ] = None,
) -> None:
    """Show the resolved configuration (token redacted)."""
    settings = get_settings(org, api_url)
    token = settings.access_token

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("API URL", settings.api_url or "[red]not set[/red]")
    table.add_row("Organization", settings.org or "-")
    table.add_row("Known organizations", ", ".join(sorted(settings.tokens_by_org)) or "-")
    table.add_row("Access token", redact_token(token) if token else "[red]not set[/red]")
    table.add_row("Component resource", settings.prototype_resource or "-")
    table.add_row("Service publish resource", settings.service_publish_resource or "disabled")
    timeout = f"{settings.timeout_seconds}s" if settings.timeout_seconds else "none"
    table.add_row("Timeout", timeout)
    console.print(table)
