"""Command-line interface for ExpiryAlert."""

from __future__ import annotations

import json
from typing import Any, NoReturn, Optional

import typer

from expiryalert.config import get_settings
from expiryalert.errors import ItemNotFoundError, ItemValidationError
from expiryalert.logging_utils import configure_logging
from expiryalert.models.inventory import StatusFilter, WastedSummary
from expiryalert.tracker.editor import EntryForm
from expiryalert.tracker.factory import build_inventory_store
from expiryalert.tracker.freshness import annotate
from expiryalert.tracker.store import InventoryStore

app = typer.Typer(help="Track perishable items and their expiry dates.")

PRETTY_OPTION = typer.Option(False, "--pretty", help="Pretty-print output JSON.")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log store activity to stderr."),
) -> None:
    if verbose:
        settings = get_settings()
        configure_logging("DEBUG", settings.log_format, [settings.api_token or ""])


def _open_store() -> InventoryStore:
    return build_inventory_store(get_settings())


def _emit(payload: Any, pretty: bool) -> None:
    if pretty:
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
    else:
        typer.echo(json.dumps(payload))


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command()
def add(
    name: str = typer.Argument(..., help="Item name."),
    expiry: Optional[str] = typer.Option(
        None,
        "--expiry",
        "-e",
        help="Expiry date (YYYY-MM-DD). Suggested from the shelf-life table when omitted.",
    ),
    pretty: bool = PRETTY_OPTION,
) -> None:
    """Add an item to the inventory."""

    form = EntryForm(_open_store())
    if expiry:
        form.set_expiry(expiry)
    form.set_name(name)

    try:
        saved = form.submit()
    except ItemValidationError as exc:
        _fail(str(exc))
    if saved is None:
        _fail(f"No expiry given and no shelf-life entry for '{name}'; pass --expiry.")
    _emit(saved.model_dump(mode="json"), pretty)


@app.command("list")
def list_items(
    status: StatusFilter = typer.Option(StatusFilter.ALL, "--status", "-s", help="Freshness filter."),
    pretty: bool = PRETTY_OPTION,
) -> None:
    """List active items ordered by expiry."""

    store = _open_store()
    today = store.today()
    views = [annotate(item, today, store.near_days) for item in store.view(status, today)]
    _emit([view.model_dump(mode="json") for view in views], pretty)


@app.command()
def update(
    item_id: int = typer.Argument(..., help="Item id."),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New name."),
    expiry: Optional[str] = typer.Option(None, "--expiry", "-e", help="New expiry date (YYYY-MM-DD)."),
    pretty: bool = PRETTY_OPTION,
) -> None:
    """Change the name and/or expiry of an item."""

    if name is None and expiry is None:
        _fail("Nothing to update; pass --name and/or --expiry.")

    form = EntryForm(_open_store())
    try:
        form.begin_edit(item_id)
        if name is not None:
            form.set_name(name)
        if expiry is not None:
            form.set_expiry(expiry)
        saved = form.submit()
    except (ItemNotFoundError, ItemValidationError) as exc:
        _fail(str(exc))
    if saved is None:
        _fail("Name and expiry must not be empty.")
    _emit(saved.model_dump(mode="json"), pretty)


@app.command()
def delete(item_id: int = typer.Argument(..., help="Item id.")) -> None:
    """Remove an item without recording it as wasted."""

    try:
        removed = _open_store().delete(item_id)
    except ItemNotFoundError as exc:
        _fail(str(exc))
    typer.echo(f"Deleted {removed.name} ({removed.expiry.isoformat()}).")


@app.command()
def waste(
    item_id: int = typer.Argument(..., help="Item id."),
    pretty: bool = PRETTY_OPTION,
) -> None:
    """Move an item to the wasted list."""

    try:
        moved = _open_store().mark_wasted(item_id)
    except ItemNotFoundError as exc:
        _fail(str(exc))
    _emit(moved.model_dump(mode="json"), pretty)


@app.command()
def wasted(pretty: bool = PRETTY_OPTION) -> None:
    """Show the wasted items and their count."""

    store = _open_store()
    summary = WastedSummary(count=store.wasted_count, items=list(store.wasted))
    _emit(summary.model_dump(mode="json"), pretty)


@app.command()
def suggest(name: str = typer.Argument(..., help="Item name to look up.")) -> None:
    """Print the suggested expiry date for a known item name."""

    suggestion = _open_store().suggest_expiry(name)
    if suggestion is None:
        _fail(f"No shelf-life entry for '{name}'.")
    typer.echo(suggestion.isoformat())


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the ``expiryalert`` script."""
    app(prog_name="expiryalert", args=argv)


if __name__ == "__main__":
    main()
