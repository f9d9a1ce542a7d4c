"""
Structured error types for tokensmith.

Every fatal condition of a build or an icon run is raised as a
TokensmithError subclass. Each error carries a category, a structured
context (which file, which platform, which registry key) and an optional
chained cause, so the CLI can print one descriptive line and logs keep the
full picture.

Manifesto:
    - **Typed hierarchy:** one error type per failure domain
    - **Rich context:** errors know the path/platform they are about
    - **Error chaining:** the original exception is kept as ``__cause__``
    - **No retries:** every operation is local and re-runnable, so errors
      carry no retry semantics

Architecture:
    ::

        ┌───────────────────────────────────────────────────────────────┐
        │                      TokensmithError                          │
        │               (category, context, cause)                      │
        ├───────────────────────────────────────────────────────────────┤
        │  ConfigError          TokenSourceError     TransformError     │
        │  (CONFIG)             (SOURCE)             (TRANSFORM)        │
        │     │                      │                                  │
        │  MissingConfigError   TokenParseError      FormatError        │
        │  InvalidConfigError   (PARSE)              (FORMAT)           │
        │  RegistryError                                                │
        │                                                               │
        │  NoIconsFoundError    RegistryWriteError                      │
        │  (VALIDATION)         (STORAGE)                               │
        └───────────────────────────────────────────────────────────────┘

Examples:
    >>> error = TokenParseError("Unexpected token in JSON")
    >>> error.with_context(path="properties/color/base.json")
    TokenParseError('Unexpected token in JSON', category=PARSE)
    >>> error.context.path
    'properties/color/base.json'

Guardrails:
    ❌ DON'T: raise bare Exception for a known failure
    ✅ DO: pick the subclass matching the failure domain

    ❌ DON'T: catch TransformError/FormatError inside the engine
    ✅ DO: let them reach the CLI, which exits non-zero

Tags:
    error-handling, exception-hierarchy, error-context, tokensmith
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories used for classification and logging."""

    CONFIG = "CONFIG"          # Missing or invalid build configuration / registry
    SOURCE = "SOURCE"          # Token sources absent
    PARSE = "PARSE"            # Malformed JSON / YAML
    TRANSFORM = "TRANSFORM"    # Transform failed on a token
    FORMAT = "FORMAT"          # Formatter could not render
    STORAGE = "STORAGE"        # File system write failures
    VALIDATION = "VALIDATION"  # Inputs present but unusable (e.g. zero icons)
    INTERNAL = "INTERNAL"      # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        path: File the error is about (token source, registry, asset)
        platform: Build platform name
        destination: Output destination within the platform
        key: Token path, registry key or configuration key
        metadata: Additional key-value pairs
    """

    path: str | None = None
    platform: str | None = None
    destination: str | None = None
    key: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["path", "platform", "destination", "key"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class TokensmithError(Exception):
    """
    Base exception for all tokensmith errors.

    Subclasses set ``default_category``; callers can override it per
    instance. ``cause`` is chained onto ``__cause__`` so tracebacks show
    the underlying failure.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> TokensmithError:
        """
        Add context to this error (fluent API).

        Usage:
            raise TokenParseError("bad json").with_context(path=str(source))
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(TokensmithError):
    """Build configuration or hand-maintained input is missing or invalid."""

    default_category = ErrorCategory.CONFIG


class MissingConfigError(ConfigError):
    """Required configuration is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"Missing required configuration: {key}")
        self.context.key = key


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")
        self.context.key = key


class RegistryError(ConfigError):
    """The icon registry file is absent, unparsable or structurally wrong."""


# =============================================================================
# TOKEN SOURCE ERRORS
# =============================================================================


class TokenSourceError(TokensmithError):
    """No token source file matched the configured patterns."""

    default_category = ErrorCategory.SOURCE


class TokenParseError(TokenSourceError):
    """A token source file is not valid JSON."""

    default_category = ErrorCategory.PARSE


# =============================================================================
# ENGINE ERRORS (never caught inside the engine)
# =============================================================================


class TransformError(TokensmithError):
    """A transform could not be applied to a token."""

    default_category = ErrorCategory.TRANSFORM


class FormatError(TokensmithError):
    """A formatter could not render its output."""

    default_category = ErrorCategory.FORMAT


# =============================================================================
# ICON ERRORS
# =============================================================================


class NoIconsFoundError(TokensmithError):
    """Neither the outline nor the solid tree contains a single icon."""

    default_category = ErrorCategory.VALIDATION


class RegistryWriteError(TokensmithError):
    """Persisting the icon registry failed."""

    default_category = ErrorCategory.STORAGE


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
]
