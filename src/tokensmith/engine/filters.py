"""Attribute filters: partial deep match of a filter spec against a token."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from tokensmith.engine.tokens import Token


def _matches(actual: Any, expected: Any) -> bool:
    if isinstance(expected, Mapping):
        if not isinstance(actual, Mapping):
            return False
        return all(key in actual and _matches(actual[key], value) for key, value in expected.items())
    return actual == expected


def matches_filter(token: Token, spec: Mapping[str, Any] | None) -> bool:
    """True if every key of ``spec`` matches the token.

    ``{"attributes": {"category": "asset", "type": "icon"}}`` matches any
    token whose attributes contain both pairs; other attributes are ignored.
    An empty or missing spec matches everything.
    """
    if not spec:
        return True
    return _matches(token.as_dict(), spec)


def filter_tokens(tokens: Iterable[Token], spec: Mapping[str, Any] | None) -> list[Token]:
    return [token for token in tokens if matches_filter(token, spec)]
