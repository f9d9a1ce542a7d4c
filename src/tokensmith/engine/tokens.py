"""
Token store: load, merge and walk design token source files.

A token is any JSON object carrying a ``value`` key. Everything above it
is a group; the keys leading to it form the token path::

    {"color": {"primary": {"value": "#0055ff", "comment": "Brand"}}}
      ->  Token(path=("color", "primary"), value="#0055ff", comment="Brand")
"""

from __future__ import annotations

import copy
import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from tokensmith.core.errors import TokenParseError, TokenSourceError
from tokensmith.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Token:
    """A single design token.

    Attributes:
        path: Keys from the tree root to the token
        value: Current (possibly transformed) value
        original_value: Value as written in the source file
        name: Output name; the last path segment until a name transform runs
        attributes: Category/type/... attributes, plus any declared on the token
        comment: Optional comment carried into formats that support one
        file_path: Source file the token was read from
    """

    path: tuple[str, ...]
    value: Any
    original_value: Any = None
    name: str = ""
    attributes: dict[str, Any] = field(default_factory=dict)
    comment: str | None = None
    file_path: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Plain view used by attribute filters."""
        return {
            "name": self.name,
            "value": self.value,
            "original_value": self.original_value,
            "path": list(self.path),
            "attributes": dict(self.attributes),
            "comment": self.comment,
        }

    def evolve(self, **changes: Any) -> Token:
        """Return a copy with some fields replaced."""
        return replace(self, **changes)


def is_token(node: Any) -> bool:
    """True if a tree node is a token (an object with a ``value``)."""
    return isinstance(node, dict) and "value" in node


def _merge(target: dict[str, Any], incoming: dict[str, Any], source: Path, path: tuple[str, ...] = ()) -> None:
    for key, value in incoming.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, dict) and not is_token(current) and not is_token(value):
            _merge(current, value, source, path + (key,))
            continue
        if current is not None and (is_token(current) or is_token(value)):
            logger.warning(
                "token_collision",
                token=".".join(path + (key,)),
                file=str(source),
            )
        target[key] = value


def _stamp_sources(node: Any, source: Path) -> Any:
    """Record the source file on every token of a freshly parsed tree."""
    if is_token(node):
        node = dict(node)
        node["__file__"] = str(source)
        return node
    if isinstance(node, dict):
        return {k: _stamp_sources(v, source) for k, v in node.items()}
    return node


def expand_sources(root: Path, patterns: Iterable[str]) -> list[Path]:
    """Expand source glob patterns relative to root, sorted and de-duplicated."""
    found: dict[Path, None] = {}
    for pattern in patterns:
        for path in sorted(root.glob(pattern)):
            if path.is_file():
                found.setdefault(path, None)
    return list(found)


def load_token_tree(root: Path, patterns: Iterable[str]) -> dict[str, Any]:
    """Parse every source file and deep-merge them into one tree.

    Later files override earlier ones when both define the same token.

    Raises:
        TokenSourceError: No file matched the patterns
        TokenParseError: A file is not valid JSON
    """
    patterns = list(patterns)
    sources = expand_sources(root, patterns)
    if not sources:
        raise TokenSourceError(
            f"No token source files match {patterns} under {root}"
        ).with_context(path=str(root))

    tree: dict[str, Any] = {}
    for source in sources:
        try:
            data = json.loads(source.read_text(encoding="utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise TokenParseError(f"Invalid JSON in {source}: {e}", cause=e).with_context(
                path=str(source)
            ) from e
        if not isinstance(data, dict):
            raise TokenParseError(f"Token file {source} must contain a JSON object").with_context(
                path=str(source)
            )
        _merge(tree, _stamp_sources(data, source), source)

    logger.debug("token_sources_loaded", files=len(sources))
    return tree


def _walk(node: dict[str, Any], path: tuple[str, ...]) -> Iterator[Token]:
    for key, child in node.items():
        if not isinstance(child, dict):
            continue
        child_path = path + (key,)
        if is_token(child):
            yield Token(
                path=child_path,
                value=copy.deepcopy(child["value"]),
                original_value=copy.deepcopy(child["value"]),
                name=key,
                attributes=dict(child.get("attributes") or {}),
                comment=child.get("comment"),
                file_path=child.get("__file__"),
            )
        else:
            yield from _walk(child, child_path)


def flatten_tokens(tree: dict[str, Any]) -> list[Token]:
    """All tokens of a tree, depth-first in insertion order."""
    return list(_walk(tree, ()))


def build_tree(tokens: Iterable[Token]) -> dict[str, Any]:
    """Rebuild a nested tree whose leaves are Token objects."""
    tree: dict[str, Any] = {}
    for token in tokens:
        node = tree
        for key in token.path[:-1]:
            node = node.setdefault(key, {})
        node[token.path[-1]] = token
    return tree


@dataclass(frozen=True)
class TokenStore:
    """Read-only set of tokens loaded from the source tree."""

    tokens: tuple[Token, ...]

    @classmethod
    def load(cls, root: Path, patterns: Iterable[str]) -> TokenStore:
        return cls(tokens=tuple(flatten_tokens(load_token_tree(root, patterns))))

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)
