"""
Output formats.

A format turns the tokens selected for one file into the file's text. It
receives a ``Dictionary`` with both the filtered token list and the full
nested tree of the platform's (transformed) tokens, so formats like
``css/variables`` can work on a tree group instead of the filtered list.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from tokensmith.config import FileSpec, PlatformConfig
from tokensmith.core.errors import FormatError, InvalidConfigError
from tokensmith.core.logging import get_logger
from tokensmith.engine.tokens import Token

logger = get_logger(__name__)

GENERATED_HEADER = "Do not edit directly, this file was auto-generated."

FormatFn = Callable[["Dictionary", PlatformConfig, FileSpec], str]


@dataclass(frozen=True)
class Dictionary:
    """Tokens handed to a format.

    Attributes:
        tokens: Tokens matching the file's filter, in source order
        tree: Every token of the platform, nested by path (leaves are Tokens)
    """

    tokens: tuple[Token, ...]
    tree: dict[str, Any] = field(default_factory=dict)


# Global format registry
_formats: dict[str, FormatFn] = {}


def register_format(name: str) -> Callable[[FormatFn], FormatFn]:
    """Decorator to register a format function."""

    def decorator(fn: FormatFn) -> FormatFn:
        if name in _formats:
            raise ValueError(f"Format '{name}' is already registered")
        _formats[name] = fn
        logger.debug("format_registered", name=name)
        return fn

    return decorator


def get_format(name: str) -> FormatFn:
    """Get a format by name."""
    if name not in _formats:
        available = ", ".join(sorted(_formats))
        raise InvalidConfigError("format", name, f"Unknown format '{name}'. Available: {available}")
    return _formats[name]


def list_formats() -> list[str]:
    """List all registered format names."""
    return sorted(_formats)


@register_format("json/flat")
def json_flat(dictionary: Dictionary, platform: PlatformConfig, file: FileSpec) -> str:
    """``{name: value}`` for every token, two-space indented."""
    flat = {token.name: token.value for token in dictionary.tokens}
    return json.dumps(flat, indent=2, ensure_ascii=False) + "\n"


def _scss_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


@register_format("scss/variables")
def scss_variables(dictionary: Dictionary, platform: PlatformConfig, file: FileSpec) -> str:
    """One ``$name: value;`` line per token, with the token comment if any."""
    lines = []
    for token in dictionary.tokens:
        line = f"${token.name}: {_scss_value(token.value)};"
        if token.comment:
            line += f" // {token.comment}"
        lines.append(line)
    return f"\n// {GENERATED_HEADER}\n\n" + "\n".join(lines) + "\n"


@register_format("css/variables")
def css_variables(dictionary: Dictionary, platform: PlatformConfig, file: FileSpec) -> str:
    """Utility classes for the top-level ``color`` group.

    All ``.color-<name>`` rules come first, then all ``.bg-<name>`` rules.
    The two blocks are joined with no separator between them.
    """
    group = dictionary.tree.get("color")
    if not isinstance(group, dict):
        raise FormatError("css/variables requires a top-level 'color' token group").with_context(
            platform=platform.name,
            destination=file.destination,
        )

    colors = {name: node.value for name, node in group.items() if isinstance(node, Token)}

    color_rules = "\n".join(f".color-{name} {{ color: {value}; }}" for name, value in colors.items())
    background_rules = "\n".join(f".bg-{name} {{ background: {value}; }}" for name, value in colors.items())
    return color_rules + background_rules
