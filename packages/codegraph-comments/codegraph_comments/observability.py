"""
Structured logging for codegraph-comments

structlog over stdlib logging. Importing the package configures nothing:
loggers wrap stdlib loggers, so a host application's handlers and levels
apply. Entry points (the CLI) call configure_logging().
"""

import logging
import os

import structlog
from structlog.processors import JSONRenderer


def get_log_level() -> str:
    """LOG_LEVEL from the environment, INFO when unset."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging(level: str | None = None, json_format: bool = False) -> None:
    """
    Configure structured logging.

    Args:
        level: Log level name (None → LOG_LEVEL env var, default INFO)
        json_format: Render events as JSON lines instead of console output
    """
    if level is None:
        level = get_log_level()
    level = level.upper()
    numeric_level = logging.getLevelName(level)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.append(JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    # stderr, so CLI output on stdout stays parseable
    logging.basicConfig(format="%(message)s", level=numeric_level, force=True)


def get_logger(name: str):
    """
    Get a structured logger bound to the stdlib logger `name`.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.wrap_logger(logging.getLogger(name))
