"""
CLI utility helpers: settings, container wiring and output formatting.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError as SettingsValidationError
from rich.console import Console
from rich.table import Table

from nrs.core.errors import ConfigError, NrsError, RegisterNotFoundError
from nrs.core.logging import configure_logging
from nrs.core.result import Err, Ok, Result
from nrs.core.settings import NrsSettings, get_settings
from nrs.naming.locator import SafeUrlParser
from nrs.naming.map import NrsMap
from nrs.naming.register import FileRegisterClient, NrsMapContainer, register_address

console = Console()
err_console = Console(stderr=True)


# ── Settings / wiring ────────────────────────────────────────────────────


def load_settings() -> NrsSettings:
    """Load settings, exiting with a readable message when they are invalid."""
    try:
        return get_settings()
    except SettingsValidationError as e:
        fail(ConfigError("Invalid NRS configuration", cause=e).with_context(details=str(e)))


def setup_logging(settings: NrsSettings, verbose: bool = False) -> None:
    configure_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_format=settings.log_format == "json",
        service="nrs-cli",
    )


def open_container(settings: NrsSettings, store: Path | None = None) -> NrsMapContainer:
    """Open the file register store; a missing store file is not created yet."""
    match FileRegisterClient.open(store or settings.register_file):
        case Err(error):
            fail(error)
        case Ok(register):
            return NrsMapContainer(
                register,
                SafeUrlParser(settings.url_scheme),
                strict_names=settings.strict_names,
            )


def load_map(container: NrsMapContainer, top_name: str, version: str | None = None) -> NrsMap:
    """Load the map owned by ``top_name``; a top name never written to is an empty map."""
    match container.load(register_address(top_name), version):
        case Err(RegisterNotFoundError()) if version is None:
            return NrsMap(container.parser, strict_names=container.strict_names)
        case result:
            return exit_on_err(result)


# ── Output helpers ───────────────────────────────────────────────────────


def fail(error: Exception) -> None:
    """Print an error and exit with status 1."""
    if isinstance(error, NrsError):
        err_console.print(
            f"[bold red]Error[/bold red] ({error.category.value}): {error.message}",
            markup=True,
            highlight=False,
            soft_wrap=True,
        )
        details = error.context.metadata.get("details")
        if details:
            err_console.print(details, markup=False, highlight=False, soft_wrap=True)
    else:
        err_console.print(f"[bold red]Error[/bold red]: {error}", soft_wrap=True)
    raise typer.Exit(code=1)


def exit_on_err(result: Result[Any]) -> Any:
    """Unwrap ``result`` or report its error and exit."""
    match result:
        case Ok(value):
            return value
        case Err(error):
            fail(error)


def print_map(
    entries: dict[str, str],
    *,
    top_name: str | None = None,
    version: str | None = None,
    as_json: bool = False,
) -> None:
    """Render map entries as JSON or as a Rich table."""
    if as_json:
        console.print_json(json.dumps({"map": entries}))
        return

    if not entries:
        console.print("[dim]No entries.[/dim]")
        return

    title = f"NRS Map: {top_name}" if top_name else "NRS Map"
    table = Table(
        title=title,
        caption=f"version {version}" if version else None,
        show_lines=False,
        pad_edge=False,
    )
    table.add_column("Subname", overflow="fold")
    if top_name:
        table.add_column("Full name", overflow="fold")
    table.add_column("Link", overflow="fold")
    for subname, link in entries.items():
        row = [subname or "[dim](default)[/dim]"]
        if top_name:
            row.append(f"{subname}.{top_name}" if subname else top_name)
        row.append(link)
        table.add_row(*row)
    console.print(table)
