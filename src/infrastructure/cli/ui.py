"""UI helpers for CLI interaction.

This module provides reusable UI components and helpers for the CLI,
keeping the presentation logic separate from registry logic.
"""

from collections.abc import Callable, Iterable
import functools
from typing import Any, ParamSpec, TypeVar

from rich.console import Console
from rich.table import Table
import typer

from src.config import get_logger
from src.domain.entities import SearchableInfo

# Initialize console and logger
console = Console()
logger = get_logger(__name__)

# Type variables for command handler decorator
P = ParamSpec("P")
R = TypeVar("R")


def command_error_handler(func: Callable[P, R]) -> Callable[P, R]:
    """Decorator to standardize error handling for CLI commands.

    This decorator wraps a command function to:
    1. Provide consistent error handling using Typer's Exit mechanism
    2. Log errors using Loguru with proper context
    3. Display user-friendly error messages with Rich

    Args:
        func: The command function to wrap

    Returns:
        Wrapped function with integrated error handling
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        operation = func.__name__.replace("_", " ")

        with logger.contextualize(operation=operation):
            try:
                logger.debug(f"Executing {operation}")
                return func(*args, **kwargs)

            except typer.Exit:
                raise

            except typer.Abort:
                logger.info(f"Operation {operation} aborted by user")
                raise

            except Exception as e:
                logger.exception(f"Error during {operation}")
                console.print(f"\n[bold red]✗ Error during {operation}:[/bold red] {e}")
                raise typer.Exit(code=1) from e

    return wrapper


_RESOURCE_FIELDS = frozenset({
    "label",
    "hint",
    "icon",
    "search_button_text",
    "voice_language_model",
    "voice_prompt_text",
    "voice_language",
})


def _ref(value: int) -> str:
    return f"0x{value:08x}" if value else "-"


def _text(value: Any) -> str:
    return "-" if value is None else str(value)


def searchable_to_dict(info: SearchableInfo) -> dict[str, Any]:
    """Flatten a record into JSON-friendly values."""
    return {
        "component": info.search_activity.flatten_to_short_string(),
        "label": info.label_id,
        "hint": info.hint_id,
        "icon": info.icon_id,
        "search_button_text": info.search_button_text,
        "search_mode": info.search_mode,
        "badge_label": info.badge_label,
        "badge_icon": info.badge_icon,
        "query_rewrite_from_data": info.query_rewrite_from_data,
        "query_rewrite_from_text": info.query_rewrite_from_text,
        "input_type": info.input_type,
        "ime_options": info.ime_options,
        "include_in_global_search": info.include_in_global_search,
        "suggest_authority": info.suggest_authority,
        "suggest_path": info.suggest_path,
        "suggest_selection": info.suggest_selection,
        "suggest_intent_action": info.suggest_intent_action,
        "suggest_intent_data": info.suggest_intent_data,
        "suggest_threshold": info.suggest_threshold,
        "suggest_provider_package": info.suggest_provider_package,
        "voice_search_mode": info.voice_search_mode,
        "voice_language_model": info.voice_language_model_id,
        "voice_prompt_text": info.voice_prompt_text_id,
        "voice_language": info.voice_language_id,
        "voice_max_results": info.voice_max_results,
        "action_keys": [
            {
                "keycode": key.key_code,
                "query_action_msg": key.query_action_msg,
                "suggest_action_msg": key.suggest_action_msg,
                "suggest_action_msg_column": key.suggest_action_msg_column,
            }
            for key in info.action_keys
        ],
    }


def display_searchables(
    title: str,
    searchables: Iterable[SearchableInfo],
    default: SearchableInfo | None = None,
) -> None:
    """Render searchable records as a summary table."""
    table = Table(title=title, show_lines=False)
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Label", justify="right")
    table.add_column("Global", justify="center")
    table.add_column("Suggestions")
    table.add_column("Keys", justify="right")

    rows = 0
    for info in searchables:
        marker = " [green]★[/green]" if default is not None and info == default else ""
        table.add_row(
            info.search_activity.flatten_to_short_string() + marker,
            _ref(info.label_id),
            "✓" if info.include_in_global_search else "",
            _text(info.suggest_authority),
            str(len(info.action_keys)),
        )
        rows += 1

    if rows == 0:
        console.print(f"[yellow]No searchables for {title.lower()}[/yellow]")
        return
    console.print(table)


def display_searchable_detail(info: SearchableInfo) -> None:
    """Render every field of one record followed by its action keys."""
    table = Table(
        title=info.search_activity.flatten_to_short_string(), show_header=False
    )
    table.add_column("Field", style="bold")
    table.add_column("Value")

    for key, value in searchable_to_dict(info).items():
        if key == "action_keys":
            continue
        match value:
            case bool():
                shown = "yes" if value else "no"
            case int() if key in _RESOURCE_FIELDS:
                shown = _ref(value)
            case _:
                shown = _text(value)
        table.add_row(key.replace("_", " "), shown)
    console.print(table)

    if not info.action_keys:
        console.print("[dim]No action keys[/dim]")
        return

    keys = Table(title="Action keys (lookup order)")
    keys.add_column("Key code", justify="right")
    keys.add_column("Query message")
    keys.add_column("Suggest message")
    keys.add_column("Suggest column")
    for key in info.action_keys:
        keys.add_row(
            str(key.key_code),
            _text(key.query_action_msg),
            _text(key.suggest_action_msg),
            _text(key.suggest_action_msg_column),
        )
    console.print(keys)
