"""
User Admin Client.

- core/: Configuration, logging, and exception types
- schemas/: Pydantic models for the user API payloads
- cli/: HTTP client, session, gateway operations, and the Typer/Rich driver
"""

__version__ = "0.1.0"
