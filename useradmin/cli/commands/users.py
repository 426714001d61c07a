"""
User Commands.

Single-shot commands for the user API. Each invocation opens a fresh
session: it logs in first when credentials are available (options, or
API_USERNAME / API_PASSWORD from config/.env), then runs one operation.
Without credentials the request is sent anonymously and the server decides.
"""

from typing import Any, Callable, Optional

import typer
from rich.console import Console
from rich.table import Table

from useradmin.cli.gateway import UserGateway
from useradmin.core.config import get_settings
from useradmin.core.exceptions import ApplicationError
from useradmin.core.logging import get_logger, log_with_source
from useradmin.schemas.user import User

app = typer.Typer(help="User management commands")
console = Console()
logger = get_logger(__name__)

USERNAME_OPTION = typer.Option(None, "--username", "-u", help="Login name (default: API_USERNAME)")
PASSWORD_OPTION = typer.Option(None, "--password", "-p", help="Password (default: API_PASSWORD)")


def open_gateway(options: dict[str, Any] | None = None) -> UserGateway:
    """
    Build a gateway from the global CLI options.

    A timeout of 0 disables the timeout; an absent one defers to application.yaml.
    """
    options = options or {}
    kwargs: dict[str, Any] = {}
    if options.get("timeout") is not None:
        kwargs["timeout"] = options["timeout"] or None
    return UserGateway.from_settings(base_url=options.get("base_url"), **kwargs)


def _resolve_credentials(
    username: str | None, password: str | None,
) -> tuple[str, str] | None:
    """Pick credentials from options, then secrets. Prompts for a missing password."""
    if username is None or password is None:
        try:
            settings = get_settings()
        except RuntimeError:
            settings = None
        if settings is not None:
            username = username or settings.api_username
            if password is None and username == settings.api_username:
                password = settings.api_password

    if not username:
        return None
    if password is None:
        password = typer.prompt("Password", hide_input=True)
    return username, password


def display_user(user: User, title: str = "User") -> None:
    """Print a single user."""
    console.print(
        f"[green]{title}:[/green] ID: {user.id}, Name: {user.name}, "
        f"Email: {user.email}, Age: {user.age}"
    )


def display_users(users: list[User]) -> None:
    """Print users as a table, in server order."""
    if not users:
        console.print("[dim]No users.[/dim]")
        return

    table = Table(title="Users", show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Age", justify="right")

    for user in users:
        table.add_row(str(user.id), user.name, user.email, str(user.age))

    console.print(table)


def _run(
    ctx: typer.Context,
    username: str | None,
    password: str | None,
    action: Callable[[UserGateway], None],
) -> None:
    """Open a gateway, log in if possible, run one action, report errors."""
    try:
        with open_gateway(ctx.obj) as gateway:
            credentials = _resolve_credentials(username, password)
            if credentials is not None:
                gateway.login(*credentials)
            action(gateway)
    except ApplicationError as e:
        log_with_source(logger, "cli", "debug", "Command failed", code=e.code)
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)
    except RuntimeError as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("[dim]Pass --base-url or run from the project root.[/dim]")
        raise typer.Exit(1)


@app.command("list")
def list_users(
    ctx: typer.Context,
    username: Optional[str] = USERNAME_OPTION,
    password: Optional[str] = PASSWORD_OPTION,
) -> None:
    """
    List all users.

    Examples:
        cli.py users list
        cli.py users list -u admin
    """
    _run(ctx, username, password, lambda gateway: display_users(gateway.list_users()))


@app.command()
def create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="User name"),
    email: str = typer.Argument(..., help="User email"),
    age: int = typer.Argument(..., help="User age"),
    username: Optional[str] = USERNAME_OPTION,
    password: Optional[str] = PASSWORD_OPTION,
) -> None:
    """
    Create a user.

    Examples:
        cli.py users create Alice alice@x.com 30
    """
    _run(
        ctx, username, password,
        lambda gateway: display_user(gateway.create_user(name, email, age), "User created"),
    )


@app.command()
def update(
    ctx: typer.Context,
    user_id: int = typer.Argument(..., help="ID of the user to update"),
    name: str = typer.Argument(..., help="New name"),
    email: str = typer.Argument(..., help="New email"),
    age: int = typer.Argument(..., help="New age"),
    username: Optional[str] = USERNAME_OPTION,
    password: Optional[str] = PASSWORD_OPTION,
) -> None:
    """
    Replace a user's name, email and age.

    Examples:
        cli.py users update 5 Bob bob@x.com 41
    """
    _run(
        ctx, username, password,
        lambda gateway: display_user(
            gateway.update_user(user_id, name, email, age), "User updated",
        ),
    )


@app.command()
def delete(
    ctx: typer.Context,
    user_id: int = typer.Argument(..., help="ID of the user to delete"),
    username: Optional[str] = USERNAME_OPTION,
    password: Optional[str] = PASSWORD_OPTION,
) -> None:
    """
    Delete a user.

    Examples:
        cli.py users delete 5
    """
    _run(
        ctx, username, password,
        lambda gateway: console.print(
            f"[green]User with ID {gateway.delete_user(user_id)} deleted[/green]"
        ),
    )
