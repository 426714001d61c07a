#!/usr/bin/env python3
"""
User Admin CLI.

Command-line client for the remote user-management API.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                                # Show help

    # Single-shot commands (log in with -u/-p or API_USERNAME/API_PASSWORD)
    python cli.py users list
    python cli.py users create Alice alice@x.com 30
    python cli.py users update 5 Bob bob@x.com 41
    python cli.py users delete 5

    # Interactive mode (login once, then list/create/update/delete)
    python cli.py shell

Options:
    --base-url        API base URL (overrides application.yaml)
    --timeout         Request timeout in seconds, 0 to disable
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
    --help            Show help message
"""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from useradmin.cli.commands import users_app
from useradmin.core.config import validate_project_root

console = Console()


def _validate_project_root() -> None:
    """Validate that we're running from the project root."""
    try:
        validate_project_root()
    except SystemExit as e:
        console.print(f"[red]{e}[/red]")
        console.print("[dim]Run from the project root or pass --base-url.[/dim]")
        raise typer.Exit(1)


# Create main app
app = typer.Typer(
    name="useradmin",
    help="User Admin CLI - log in and manage users on the remote API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register command groups
app.add_typer(users_app, name="users")


@app.command()
def shell(ctx: typer.Context) -> None:
    """
    Start interactive shell mode.

    Log in once, then list, create, update and delete users in the same session.
    """
    from useradmin.cli.shell import run_shell

    try:
        run_shell(ctx.obj)
    except RuntimeError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="API base URL (default: api.base_url in application.yaml)",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        min=0,
        help="Request timeout in seconds, 0 to wait indefinitely",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    User Admin CLI.

    Log in and manage users on the remote API.
    """
    # Configuration files are only needed when the URL or logging comes from them
    if base_url is None or verbose or debug:
        _validate_project_root()

    ctx.obj = {"base_url": base_url, "timeout": timeout}

    # Configure logging based on flags
    if debug:
        from useradmin.core.logging import setup_logging
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        from useradmin.core.logging import setup_logging
        setup_logging(level="INFO", format_type="console")


if __name__ == "__main__":
    app()
