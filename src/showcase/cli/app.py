"""
Root Typer application for the showcase CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

app = Typer(
    name="showcase",
    help="showcase — company website content API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        from showcase import __version__

        typer.echo(f"showcase {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """showcase CLI — serve the API and manage its store."""


# ── Sub-command registration ─────────────────────────────────────────────

from showcase.cli.admin import app as admin_app  # noqa: E402
from showcase.cli.db import app as db_app  # noqa: E402
from showcase.cli.serve import serve  # noqa: E402

app.command("serve", help="Start the API server.")(serve)
app.add_typer(db_app, name="db", help="Database operations.")
app.add_typer(admin_app, name="admin", help="Administrator accounts.")
