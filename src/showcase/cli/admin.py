"""
CLI: ``showcase admin`` — administrator accounts.
"""

from __future__ import annotations

import typer

from showcase.cli.utils import console, fail, make_access
from showcase.core.errors import ShowcaseError
from showcase.core.writer import validate_payload
from showcase.ops.auth import RegisterRequest, create_admin

app = typer.Typer(no_args_is_help=True)


@app.command()
def create(
    username: str = typer.Option(..., "--username", "-u"),
    email: str = typer.Option(..., "--email", "-e"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
    role: str = typer.Option("admin", "--role", help="admin or super_admin"),
    database: str | None = typer.Option(None, "--database", "-d", help="SQLAlchemy URL override"),
) -> None:
    """Create an administrator account."""
    access = make_access(database)
    try:
        request = validate_payload(
            RegisterRequest, {"username": username, "email": email, "password": password}
        )
        access.writer.require_store()
        access.create_tables()
        admin = create_admin(
            access,
            username=request.username,
            email=request.email,
            password=request.password,
            role=role,
        )
    except ShowcaseError as e:
        raise fail(e) from e
    console.print(f"[green]Created admin[/green] {admin.username} ({admin.id})")
