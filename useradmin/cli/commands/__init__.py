"""
CLI Commands.

Organized by domain/feature area.
"""

from useradmin.cli.commands.users import app as users_app

__all__ = [
    "users_app",
]
