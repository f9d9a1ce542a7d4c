"""
tokensmith logging - structured logging for builds and icon runs.

Manifesto:
    Builds write many files; when one goes wrong the log line has to say
    which platform and which destination. Every log call is a snake_case
    event plus keyword fields, rendered by structlog:

    - **Console:** colored key/value output when stderr is a terminal
    - **JSON:** one object per line for CI logs

    Logs go to stderr. Command output (counts, tables, prompts) goes to
    stdout through the CLI console, so the two never interleave in pipes.

Architecture:
    ::

        configure_logging(level="INFO", json_format=None)
              │
              ▼
        structlog processor chain:
          1. merge_contextvars   (platform=..., run=...)
          2. add_log_level
          3. add_logger_name
          4. TimeStamper(iso)
          5. StackInfoRenderer / format_exc_info
          6. JSONRenderer | ConsoleRenderer

Examples:
    >>> from tokensmith.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> logger.info("file_written", path="build/json/colors.json", tokens=12)

    Scoped context:

    >>> with LogContext(platform="scss"):
    ...     logger.info("platform_started")

Tags:
    logging, structlog, tokensmith
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

# Track if logging has been configured
_configured = False


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    force: bool = False,
) -> None:
    """Configure structured logging for the process.

    Subsequent calls are no-ops unless ``force=True``.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto
            (JSON if stderr is not a tty)
        force: Reconfigure even if already configured
    """
    global _configured

    if _configured and not force:
        return

    log_level = getattr(logging, level.upper())

    if json_format is None:
        json_format = not sys.stderr.isatty()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # stdlib handler the structlog LoggerFactory writes through
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )
    logging.getLogger("tokensmith").setLevel(log_level)

    _configured = True


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(platform="css"):
            logger.info("file_written", path="build/css/classes.css")
        # platform unbound here
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args) -> None:
        unbind_context(*self._context.keys())


__all__ = [
    "configure_logging",
    "is_configured",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
