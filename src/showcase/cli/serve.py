"""
CLI: ``showcase serve`` — run the API under uvicorn.

The app is built through the ``create_app`` factory in each worker, so the
database URL is handed over through ``SHOWCASE_DATABASE_URL`` rather than as
an argument.  The API starts even when the store is unreachable; reads are
then served from the fallback catalog until the heartbeat reconnects.
"""

from __future__ import annotations

import os

import typer
import uvicorn

from showcase.api.deps import get_settings
from showcase.cli.utils import console


def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
    database: str | None = typer.Option(
        None, "--database", "-d", help="Database URL (overrides SHOWCASE_DATABASE_URL)"
    ),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    workers: int = typer.Option(1, "--workers", "-w", help="Number of workers"),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Start the showcase REST API server."""
    if database:
        os.environ["SHOWCASE_DATABASE_URL"] = database
        get_settings.cache_clear()
    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(
        f"[bold green]Starting showcase API[/bold green] on {host}:{port} "
        f"[dim](store: {settings.database_url})[/dim]"
    )
    uvicorn.run(
        "showcase.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )
