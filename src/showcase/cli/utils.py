"""
CLI utility helpers — output formatting and access-layer construction.
"""

from __future__ import annotations

from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from showcase.core.access import ContentAccess, build_access
from showcase.core.errors import ShowcaseError
from showcase.core.probe import ManagedProbe
from showcase.core.settings import ShowcaseSettings

console = Console()
err_console = Console(stderr=True)


# ── Access helper ────────────────────────────────────────────────────────


def make_access(database: str | None = None) -> ContentAccess:
    """Build the access layer and ping the store once."""
    settings = ShowcaseSettings()
    if database:
        settings = settings.model_copy(update={"database_url": database})
    access = build_access(settings)
    if isinstance(access.probe, ManagedProbe):
        access.probe.connect()
    return access


def fail(exc: ShowcaseError) -> typer.Exit:
    """Print *exc* and return the exit to raise."""
    err_console.print(f"[bold red]Error[/bold red] ({exc.kind.value}): {exc.message}")
    for field_error in exc.errors:
        err_console.print(f"  [red]{field_error.field}[/red]: {field_error.message}")
    return typer.Exit(code=1)


# ── Output helpers ───────────────────────────────────────────────────────


def print_table(rows: list[dict[str, Any]], *, title: str = "") -> None:
    """Render a list of dicts as a Rich table."""
    if not rows:
        console.print("[dim]No items.[/dim]")
        return
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in rows[0]:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(str(v) for v in row.values()))
    console.print(table)


def print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {v}")
