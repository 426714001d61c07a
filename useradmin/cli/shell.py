"""
Interactive Shell Mode.

REPL over one long-lived gateway, so the token from `login` is reused by
every later command. Menu numbers 1-6 are accepted as aliases for the
login, list, create, update, delete and quit commands. Missing arguments
are prompted for.
"""

import shlex
from typing import Any, Callable

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from useradmin.cli.commands import users as user_commands
from useradmin.cli.gateway import UserGateway
from useradmin.core.exceptions import ApplicationError
from useradmin.core.logging import get_logger, log_with_source

console = Console()
logger = get_logger(__name__)

MENU_ALIASES = {
    "1": "login",
    "2": "list",
    "3": "create",
    "4": "update",
    "5": "delete",
    "6": "quit",
}


def _parse_int(value: str, label: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{label} must be an integer, got {value!r}") from None


class InteractiveShell:
    """
    Interactive shell for the user API.

    Usage:
        shell = InteractiveShell(gateway)
        shell.run()
    """

    def __init__(self, gateway: UserGateway) -> None:
        """Initialize the interactive shell over an open gateway."""
        self.gateway = gateway
        self.running = False
        self.commands: dict[str, Callable[[list[str]], None]] = {
            "help": self._cmd_help,
            "login": self._cmd_login,
            "list": self._cmd_list,
            "create": self._cmd_create,
            "update": self._cmd_update,
            "delete": self._cmd_delete,
            "clear": self._cmd_clear,
            "quit": self._cmd_quit,
            "exit": self._cmd_quit,
        }

    def run(self) -> None:
        """Run the interactive shell until quit or EOF."""
        self.running = True

        console.print(Panel(
            "[bold]User Admin Shell[/bold]\n"
            f"API: {self.gateway.client.base_url}\n"
            "Type [cyan]help[/cyan] for available commands, [cyan]quit[/cyan] to exit.",
            title="Welcome",
        ))
        console.print()

        while self.running:
            try:
                user_input = console.input("[bold cyan]>[/bold cyan] ").strip()
                if not user_input:
                    continue
                self.execute(user_input)
            except KeyboardInterrupt:
                console.print("\n[dim]Use 'quit' to exit[/dim]")
            except EOFError:
                break

        self.gateway.close()
        console.print("[dim]Goodbye![/dim]")

    def execute(self, line: str) -> None:
        """Parse and dispatch one command line. Errors are reported, never raised."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            console.print(f"[red]Invalid input: {e}[/red]")
            return
        if not parts:
            return

        command = MENU_ALIASES.get(parts[0], parts[0].lower())
        args = parts[1:]

        handler = self.commands.get(command)
        if handler is None:
            console.print(f"[red]Unknown command: {parts[0]}[/red]")
            console.print("Type [cyan]help[/cyan] for available commands.")
            return

        try:
            handler(args)
        except ApplicationError as e:
            log_with_source(logger, "shell", "debug", "Command failed", command=command, code=e.code)
            console.print(f"[red]Error: {e.message}[/red]")
        except ValueError as e:
            console.print(f"[red]Invalid input: {e}[/red]")

    def _arg(self, args: list[str], index: int, label: str, password: bool = False) -> str:
        """Positional argument, or prompt for it when absent."""
        if index < len(args):
            return args[index]
        return console.input(f"{label}: ", password=password)

    def _cmd_help(self, args: list[str]) -> None:
        """Display help information."""
        table = Table(title="Available Commands", show_header=True)
        table.add_column("Command", style="cyan")
        table.add_column("Description")

        table.add_row("1 | login <username> [password]", "Authenticate and keep the token")
        table.add_row("2 | list", "List users")
        table.add_row("3 | create <name> <email> <age>", "Create a user")
        table.add_row("4 | update <id> <name> <email> <age>", "Update a user")
        table.add_row("5 | delete <id>", "Delete a user")
        table.add_row("6 | quit / exit", "Exit the shell")
        table.add_row("help", "Show this help message")
        table.add_row("clear", "Clear the screen")

        console.print(table)

    def _cmd_login(self, args: list[str]) -> None:
        username = self._arg(args, 0, "Username")
        password = self._arg(args, 1, "Password", password=True)
        self.gateway.login(username, password)
        console.print("[green]Logged in[/green]")

    def _cmd_list(self, args: list[str]) -> None:
        user_commands.display_users(self.gateway.list_users())

    def _cmd_create(self, args: list[str]) -> None:
        name = self._arg(args, 0, "Name")
        email = self._arg(args, 1, "Email")
        age = _parse_int(self._arg(args, 2, "Age"), "Age")
        user = self.gateway.create_user(name, email, age)
        user_commands.display_user(user, "User created")

    def _cmd_update(self, args: list[str]) -> None:
        user_id = _parse_int(self._arg(args, 0, "User ID"), "User ID")
        name = self._arg(args, 1, "New name")
        email = self._arg(args, 2, "New email")
        age = _parse_int(self._arg(args, 3, "New age"), "Age")
        user = self.gateway.update_user(user_id, name, email, age)
        user_commands.display_user(user, "User updated")

    def _cmd_delete(self, args: list[str]) -> None:
        user_id = _parse_int(self._arg(args, 0, "User ID to delete"), "User ID")
        deleted = self.gateway.delete_user(user_id)
        console.print(f"[green]User with ID {deleted} deleted[/green]")

    def _cmd_clear(self, args: list[str]) -> None:
        """Clear the screen."""
        console.clear()

    def _cmd_quit(self, args: list[str]) -> None:
        """Exit the shell."""
        self.running = False


def run_shell(options: dict[str, Any] | None = None) -> None:
    """Run the interactive shell with a gateway built from the CLI options."""
    shell = InteractiveShell(user_commands.open_gateway(options))
    shell.run()
