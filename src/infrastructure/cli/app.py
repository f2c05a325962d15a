"""Searchables CLI - Main application entry point and app structure."""

from importlib.metadata import version
from pathlib import Path
from typing import Annotated

from rich.console import Console
import typer

from src.config import get_logger, log_startup_info, settings, setup_loguru_logger
from src.infrastructure.cli.searchables_commands import register_searchables_commands

VERSION = version("searchables")

console = Console(width=80)
logger = get_logger(__name__)

app = typer.Typer(
    help=f"🔎 Searchables v{VERSION} - Inspect the searchable component registry",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
)

register_searchables_commands(app)


@app.command(name="version", rich_help_panel="⚙️ System")
def version_command() -> None:
    """Show version information."""
    console.print(
        f"[bold bright_blue]🔎 Searchables[/bold bright_blue] [dim]v{VERSION}[/dim]"
    )


@app.callback()
def init_cli(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output"),
    ] = False,
    manifest_dir: Annotated[
        Path | None,
        typer.Option(
            "--manifests",
            "-m",
            help="Directory of XML package manifests (default from settings)",
        ),
    ] = None,
) -> None:
    """Initialize the searchables CLI."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["manifest_dir"] = manifest_dir or settings.registry.manifest_dir

    setup_loguru_logger(verbose)
    if verbose:
        log_startup_info()


def main() -> int:
    """Application entry point."""
    try:
        return app() or 0
    except Exception:
        logger.exception("Unhandled exception")
        return 1
