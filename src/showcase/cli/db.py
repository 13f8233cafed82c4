"""
CLI: ``showcase db`` — store management commands.
"""

from __future__ import annotations

import json

import typer
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from showcase.cli.utils import console, err_console, fail, make_access, print_dict, print_table
from showcase.core.errors import ShowcaseError

app = typer.Typer(no_args_is_help=True)

DatabaseOption = typer.Option(None, "--database", "-d", help="SQLAlchemy URL override")


def _require_connected(access) -> None:
    if not access.probe.is_available():
        err_console.print(
            f"[bold red]Store unreachable[/bold red] ({access.probe.state.value}): "
            f"{access.settings.database_url}"
        )
        raise typer.Exit(code=1)


@app.command()
def init(database: str | None = DatabaseOption) -> None:
    """Create all tables (idempotent)."""
    access = make_access(database)
    _require_connected(access)
    try:
        access.create_tables()
    except SQLAlchemyError as e:
        err_console.print(f"[bold red]Schema creation failed[/bold red]: {e}")
        raise typer.Exit(code=1) from e
    console.print("[green]Tables ready.[/green]")


@app.command()
def status(
    database: str | None = DatabaseOption,
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Report store connectivity and row counts per kind."""
    access = make_access(database)
    info = {
        "database_url": access.settings.database_url,
        "state": access.probe.state.value,
    }
    counts: list[dict[str, object]] = []
    if access.probe.is_available():
        try:
            with access.session_factory() as session:
                for kind in access.registry:
                    total = session.execute(select(func.count()).select_from(kind.table)).scalar_one()
                    counts.append({"kind": kind.name, "rows": int(total)})
        except SQLAlchemyError as e:
            info["error"] = str(e)

    if json_out:
        console.print_json(json.dumps({**info, "counts": counts}))
        return
    print_dict(info, title="Store")
    if counts:
        print_table(counts, title="Row counts")


@app.command()
def provision(
    kind: str | None = typer.Argument(None, help="Kind to provision (all when omitted)"),
    database: str | None = DatabaseOption,
) -> None:
    """Seed empty kinds with their default catalog."""
    access = make_access(database)
    _require_connected(access)
    try:
        kinds = [access.registry.get_kind(kind)] if kind else list(access.registry)
    except ShowcaseError as e:
        raise fail(e) from e

    rows = []
    for k in kinds:
        report = access.reader.provision(k)
        rows.append(
            {
                "kind": k.name,
                "created": len(report.created),
                "conflicts": report.conflicts,
                "failures": report.failures,
            }
        )
    print_table(rows, title="Provisioning")
