"""
CLI Client Module.

Command-line client built with Typer for the remote user-management API.

Architecture:
- session.py holds the bearer token
- client.py sends requests (httpx) and raises typed errors
- gateway.py implements login, list, create, update, delete
- commands/ and shell.py are the presentation layer over the gateway

Usage:
    python cli.py --help
    python cli.py users list -u admin
    python cli.py shell  # Interactive mode
"""
