"""Searchable registry inspection commands."""

from collections.abc import Iterator
from contextlib import contextmanager
import json
from pathlib import Path
from typing import Annotated

import typer

from src.application.services import RegistryCoordinator
from src.config import get_logger
from src.domain.entities import ComponentName
from src.infrastructure.cli.ui import (
    command_error_handler,
    console,
    display_searchable_detail,
    display_searchables,
    searchable_to_dict,
)
from src.infrastructure.events import PackageEventBus
from src.infrastructure.packages import ManifestDirectoryInspector

logger = get_logger(__name__)

ComponentArgument = Annotated[
    str,
    typer.Argument(help="Component as package/class (short form package/.Class allowed)"),
]


def register_searchables_commands(app: typer.Typer) -> None:
    """Register registry inspection commands with the Typer app."""
    panel = "🔎 Searchables"
    app.command(name="list", help="List registered searchables", rich_help_panel=panel)(
        list_searchables
    )
    app.command(name="show", help="Show one searchable in detail", rich_help_panel=panel)(
        show_searchable
    )
    app.command(
        name="global", help="List global search candidates", rich_help_panel=panel
    )(global_candidates)
    app.command(name="web", help="List web search candidates", rich_help_panel=panel)(
        web_candidates
    )
    app.command(
        name="encode", help="Hex dump the serialized record", rich_help_panel=panel
    )(encode_searchable)


@contextmanager
def open_coordinator(ctx: typer.Context) -> Iterator[RegistryCoordinator]:
    """Build a coordinator over the manifest directory chosen for this run."""
    manifest_dir = Path(ctx.obj["manifest_dir"])
    if not manifest_dir.is_dir():
        console.print(f"[bold red]Manifest directory not found:[/bold red] {manifest_dir}")
        raise typer.Exit(code=1)

    coordinator = RegistryCoordinator(
        ManifestDirectoryInspector(manifest_dir), PackageEventBus()
    )
    try:
        yield coordinator
    finally:
        coordinator.close()


def _component(value: str) -> ComponentName:
    try:
        return ComponentName.unflatten_from_string(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


@command_error_handler
def list_searchables(
    ctx: typer.Context,
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format (table, json)")
    ] = "table",
) -> None:
    """List every registered searchable component."""
    with open_coordinator(ctx) as coordinator:
        registry = coordinator.ensure_ready()
        records = [registry.lookup_by_component(c) for c in registry.components()]
        if output_format == "json":
            console.print_json(json.dumps([searchable_to_dict(r) for r in records]))
            return
        display_searchables("Searchables", records)


@command_error_handler
def show_searchable(ctx: typer.Context, component: ComponentArgument) -> None:
    """Show all fields of one searchable component."""
    name = _component(component)
    with open_coordinator(ctx) as coordinator:
        info = coordinator.get_searchable_info(name)
        if info is None:
            console.print(f"[yellow]{component} is not searchable[/yellow]")
            raise typer.Exit(code=1)
        display_searchable_detail(info)


@command_error_handler
def global_candidates(ctx: typer.Context) -> None:
    """List components included in global search."""
    with open_coordinator(ctx) as coordinator:
        display_searchables("Global search", coordinator.get_global_search_candidates())


@command_error_handler
def web_candidates(ctx: typer.Context) -> None:
    """List web search components; the default target is starred."""
    with open_coordinator(ctx) as coordinator:
        display_searchables(
            "Web search",
            coordinator.get_web_search_candidates(),
            default=coordinator.get_default_web_search_target(),
        )


@command_error_handler
def encode_searchable(ctx: typer.Context, component: ComponentArgument) -> None:
    """Print the serialized record as hex, 16 bytes per line."""
    name = _component(component)
    with open_coordinator(ctx) as coordinator:
        info = coordinator.get_searchable_info(name)
        if info is None:
            console.print(f"[yellow]{component} is not searchable[/yellow]")
            raise typer.Exit(code=1)
        data = info.serialize()
        for offset in range(0, len(data), 16):
            chunk = data[offset : offset + 16]
            console.print(f"{offset:08x}  {chunk.hex(' ')}", highlight=False)
        console.print(f"[dim]{len(data)} bytes[/dim]")
