"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching the network.
"""

from collections.abc import Generator
from io import StringIO
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from useradmin.cli.gateway import UserGateway
from useradmin.cli.session import Session


# =============================================================================
# Gateway Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_gateway() -> MagicMock:
    """
    Mock UserGateway for driver tests.

    Usage:
        def test_list(mock_gateway):
            mock_gateway.list_users.return_value = [User(...)]
    """
    gateway = MagicMock(spec=UserGateway)
    gateway.client = MagicMock()
    gateway.client.base_url = "http://api.test"
    gateway.session = Session()
    return gateway


# =============================================================================
# Console Fixtures
# =============================================================================


@pytest.fixture
def console_output() -> Generator[StringIO, None, None]:
    """
    Redirect the Rich consoles of the shell and user commands to a buffer.

    Usage:
        def test_output(console_output):
            ...
            assert "Logged in" in console_output.getvalue()
    """
    buffer = StringIO()
    console = Console(file=buffer, width=200, force_terminal=False, color_system=None)
    with patch("useradmin.cli.shell.console", console), \
         patch("useradmin.cli.commands.users.console", console):
        yield buffer


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                # Test code that logs
                mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
