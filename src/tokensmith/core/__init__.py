"""Core primitives shared by the engine, the icon tools and the CLI."""

from tokensmith.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    FormatError,
    InvalidConfigError,
    MissingConfigError,
    NoIconsFoundError,
    RegistryError,
    RegistryWriteError,
    TokenParseError,
    TokensmithError,
    TokenSourceError,
    TransformError,
)
from tokensmith.core.logging import LogContext, configure_logging, get_logger

__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "TokensmithError",
    "ConfigError",
    "MissingConfigError",
    "InvalidConfigError",
    "RegistryError",
    "TokenSourceError",
    "TokenParseError",
    "TransformError",
    "FormatError",
    "NoIconsFoundError",
    "RegistryWriteError",
    "configure_logging",
    "get_logger",
    "LogContext",
]
