"""
Centralized Logging Configuration.

structlog on top of stdlib logging, configured from config/settings/logging.yaml.
Records go to stderr so they never mix with command output on stdout, and
optionally to a rotating JSONL file.

Every record emitted through log_with_source carries a `source` field naming
where it came from:
    cli     - single-shot `users` commands
    shell   - interactive shell
    api     - HTTP client and gateway

Credentials and bearer tokens are never passed as fields.

Usage:
    from useradmin.core.logging import get_logger, log_with_source, setup_logging

    setup_logging()                                     # values from logging.yaml
    setup_logging(level="DEBUG", format_type="console") # overrides

    logger = get_logger(__name__)
    log_with_source(logger, "api", "debug", "API request", method="GET", path="/users")
"""

import logging
import sys
from functools import lru_cache
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from useradmin.core.config import find_project_root, load_yaml_config

VALID_SOURCES = frozenset({"cli", "shell", "api"})

# HTTP libraries that log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


@lru_cache
def _load_logging_config() -> dict[str, Any]:
    """Load and cache config/settings/logging.yaml."""
    return load_yaml_config("logging.yaml")


def _resolve_log_path(configured_path: str) -> Path:
    """Resolve the log file path relative to project root."""
    return find_project_root() / configured_path


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _formatter(format_type: str, pre_chain: list[Processor]) -> logging.Formatter:
    if format_type == "console":
        renderer: Processor = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    else:
        renderer = structlog.processors.JSONRenderer()
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def _file_handler(file_config: dict[str, Any], formatter: logging.Formatter) -> logging.Handler:
    log_path = _resolve_log_path(file_config["path"])
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=file_config["max_bytes"],
        backupCount=file_config["backup_count"],
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structured logging for the CLI.

    Arguments left as None take their value from logging.yaml.

    Args:
        level: Log level name (DEBUG, INFO, ...)
        format_type: Console format, 'json' or 'console'. The file is always JSON.
        enable_console: Write records to stderr
        enable_file_logging: Write records to the rotating JSONL file
    """
    config = _load_logging_config()
    handlers_config = config["handlers"]

    level = level or config["level"]
    format_type = format_type or config["format"]
    if enable_console is None:
        enable_console = handlers_config["console"]["enabled"]
    if enable_file_logging is None:
        enable_file_logging = handlers_config["file"]["enabled"]

    processors = _shared_processors()
    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(_formatter(format_type, processors))
        root_logger.addHandler(console_handler)

    if enable_file_logging:
        root_logger.addHandler(
            _file_handler(handlers_config["file"], _formatter("json", processors))
        )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Get a structlog logger, typically for __name__."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log a message tagged with an explicit source.

    Raises:
        ValueError: If source is not one of VALID_SOURCES
        AttributeError: If level is not a logger method
    """
    if source not in VALID_SOURCES:
        raise ValueError(f"Unknown log source {source!r}, expected one of {sorted(VALID_SOURCES)}")
    getattr(logger, level.lower())(message, source=source, **kwargs)
