"""
Root Typer application for the ``nrs`` CLI.

Each top name owns one NRS map, kept in the register named after it in the
file-backed register store. Mutating commands load that map, apply one
operation and write the new snapshot back; read-only commands never write
the store.
"""

from __future__ import annotations

from pathlib import Path

import typer
from typer import Typer

from nrs.cli.config import app as config_app
from nrs.cli.utils import (
    console,
    exit_on_err,
    fail,
    load_map,
    load_settings,
    open_container,
    print_map,
    setup_logging,
)
from nrs.core.errors import NotFoundError, RegisterNotFoundError
from nrs.core.result import Err
from nrs.naming.names import parse_subname_path, split_name
from nrs.naming.register import register_address

app = Typer(
    name="nrs",
    help="nrs: attach names to content locators and resolve them.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

StoreOption = typer.Option(None, "--store", "-s", help="Register store file.")
AtOption = typer.Option(None, "--at", help="Read the map version with this entry hash.")


def _version_callback(value: bool) -> None:
    if value:
        from nrs import __version__

        typer.echo(f"nrs {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """nrs CLI: manage NRS maps stored in registers, one map per top name."""
    setup_logging(load_settings(), verbose)


@app.command("add")
def add(
    name: str = typer.Argument(..., help="Full name, e.g. sub.example"),
    link: str = typer.Argument(..., help="Content locator to link"),
    store: Path | None = StoreOption,
) -> None:
    """Link NAME to LINK in its top name's map, replacing any existing link."""
    container = open_container(load_settings(), store)
    address = exit_on_err(container.create(split_name(name)[0]))
    stored = exit_on_err(container.add(address, name, link))
    version = exit_on_err(container.version(address))
    console.print(f"[green]✓[/green] {name} → {stored}", highlight=False, soft_wrap=True)
    console.print(f"[dim]version {version}[/dim]", highlight=False, soft_wrap=True)


@app.command("resolve")
def resolve(
    name: str = typer.Argument(..., help="Full name to resolve"),
    at: str | None = AtOption,
    store: Path | None = StoreOption,
) -> None:
    """Print the link NAME resolves to."""
    container = open_container(load_settings(), store)
    nrs_map = load_map(container, split_name(name)[0], at)
    typer.echo(exit_on_err(nrs_map.resolve_for_full_name(name)))


@app.command("remove")
def remove(
    name: str = typer.Argument(..., help="Full name whose entry to remove, e.g. sub.example"),
    store: Path | None = StoreOption,
) -> None:
    """Remove the entry for NAME from its top name's map."""
    settings = load_settings()
    container = open_container(settings, store)
    top_name, _ = split_name(name)
    subname = exit_on_err(parse_subname_path(name, strict=settings.strict_names))
    match container.remove(register_address(top_name), subname):
        case Err(RegisterNotFoundError()):
            fail(NotFoundError(f"No NRS map for top name '{top_name}'").with_context(name=name))
        case result:
            former = exit_on_err(result)
    console.print(f"[green]✓[/green] removed '{name}' (was {former})", highlight=False, soft_wrap=True)


@app.command("show")
def show(
    top_name: str = typer.Argument(..., help="Top name whose map to show, e.g. example"),
    json_out: bool = typer.Option(False, "--json"),
    at: str | None = AtOption,
    store: Path | None = StoreOption,
) -> None:
    """Show every entry of TOP_NAME's map."""
    container = open_container(load_settings(), store)
    top_name = split_name(top_name)[0]
    nrs_map = load_map(container, top_name, at)
    version = at
    if version is None:
        version = container.version(register_address(top_name)).unwrap_or(None)
    print_map(nrs_map.snapshot(), top_name=top_name, version=version, as_json=json_out)


app.add_typer(config_app, name="config", help="Configuration inspection.")
