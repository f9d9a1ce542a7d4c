"""
Named token transforms and transform groups.

A platform either lists its transforms explicitly or names a transform
group. Transforms run in order on every token they match:

- ``attribute`` transforms return attributes merged into ``token.attributes``
- ``name`` transforms return the new ``token.name``
- ``value`` transforms return the new ``token.value``

Custom transforms register the same way the built-ins do::

    @register_transform("value/upper", kind="value")
    def upper(token, context):
        return str(token.value).upper()
"""

from __future__ import annotations

import base64
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from tokensmith.config import PlatformConfig
from tokensmith.core.errors import InvalidConfigError, TransformError
from tokensmith.core.logging import get_logger
from tokensmith.engine.tokens import Token

logger = get_logger(__name__)

CTI_KEYS = ("category", "type", "item", "subitem", "state")

_WORD_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")
_NUMBER_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")
_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


class TransformKind(str, Enum):
    """What a transform changes on a token."""

    ATTRIBUTE = "attribute"
    NAME = "name"
    VALUE = "value"


@dataclass(frozen=True)
class TransformContext:
    """What a transform may need besides the token."""

    root: Path
    platform: PlatformConfig


@dataclass(frozen=True)
class Transform:
    """A registered transform."""

    name: str
    kind: TransformKind
    fn: Callable[[Token, TransformContext], Any]
    matcher: Callable[[Token], bool] | None = None

    def matches(self, token: Token) -> bool:
        return self.matcher is None or bool(self.matcher(token))

    def apply(self, token: Token, context: TransformContext) -> Token:
        result = self.fn(token, context)
        if self.kind is TransformKind.ATTRIBUTE:
            return token.evolve(attributes={**token.attributes, **result})
        if self.kind is TransformKind.NAME:
            return token.evolve(name=result)
        return token.evolve(value=result)


# Global registries
_transforms: dict[str, Transform] = {}
_groups: dict[str, tuple[str, ...]] = {}


def register_transform(
    name: str,
    kind: TransformKind | str,
    matcher: Callable[[Token], bool] | None = None,
) -> Callable[[Callable[[Token, TransformContext], Any]], Callable[[Token, TransformContext], Any]]:
    """Decorator to register a transform function."""

    def decorator(fn: Callable[[Token, TransformContext], Any]) -> Callable[[Token, TransformContext], Any]:
        if name in _transforms:
            raise ValueError(f"Transform '{name}' is already registered")
        transform = Transform(name=name, kind=TransformKind(kind), fn=fn, matcher=matcher)
        _transforms[name] = transform
        logger.debug("transform_registered", name=name, kind=transform.kind.value)
        return fn

    return decorator


def register_transform_group(name: str, transforms: Iterable[str]) -> None:
    """Register a named, ordered list of transforms."""
    if name in _groups:
        raise ValueError(f"Transform group '{name}' is already registered")
    _groups[name] = tuple(transforms)


def get_transform(name: str) -> Transform:
    """Get a transform by name."""
    if name not in _transforms:
        available = ", ".join(sorted(_transforms))
        raise InvalidConfigError("transforms", name, f"Unknown transform '{name}'. Available: {available}")
    return _transforms[name]


def get_transform_group(name: str) -> tuple[str, ...]:
    """Get the transform names of a group."""
    if name not in _groups:
        available = ", ".join(sorted(_groups))
        raise InvalidConfigError(
            "transform_group", name, f"Unknown transform group '{name}'. Available: {available}"
        )
    return _groups[name]


def list_transforms() -> list[str]:
    """List all registered transform names."""
    return sorted(_transforms)


def list_transform_groups() -> list[str]:
    """List all registered transform group names."""
    return sorted(_groups)


def resolve_transforms(platform: PlatformConfig) -> list[Transform]:
    """Transforms a platform runs, in order.

    Explicit ``transforms`` win over ``transform_group``; a platform with
    neither runs no transforms.
    """
    if platform.transforms is not None:
        names: Iterable[str] = platform.transforms
    elif platform.transform_group is not None:
        names = get_transform_group(platform.transform_group)
    else:
        names = ()
    return [get_transform(name) for name in names]


def apply_transforms(
    tokens: Iterable[Token],
    transforms: list[Transform],
    context: TransformContext,
) -> list[Token]:
    """Run every matching transform on every token, returning new tokens."""
    result = []
    for token in tokens:
        for transform in transforms:
            if transform.matches(token):
                token = transform.apply(token, context)
        result.append(token)
    return result


# =============================================================================
# Helpers
# =============================================================================


def kebab_case(text: str) -> str:
    """``"color primaryBlue 100"`` -> ``"color-primary-blue-100"``."""
    return "-".join(word.lower() for word in _WORD_RE.findall(text))


def _category_is(category: str) -> Callable[[Token], bool]:
    def matcher(token: Token) -> bool:
        return token.attributes.get("category") == category

    return matcher


def _parse_number(token: Token) -> float:
    match = _NUMBER_RE.match(str(token.value))
    if match is None:
        raise TransformError(f"Invalid number {token.value!r}").with_context(key=".".join(token.path))
    return float(match.group(1))


def _format_number(number: float) -> str:
    return f"{number:g}"


# =============================================================================
# Built-in transforms
# =============================================================================


@register_transform("attribute/cti", kind=TransformKind.ATTRIBUTE)
def attribute_cti(token: Token, context: TransformContext) -> dict[str, Any]:
    """Category/type/item/subitem/state from the token path.

    Attributes declared on the token itself take precedence.
    """
    attributes = dict(zip(CTI_KEYS, token.path))
    attributes.update(token.attributes)
    return attributes


@register_transform("name/cti/kebab", kind=TransformKind.NAME)
def name_cti_kebab(token: Token, context: TransformContext) -> str:
    return kebab_case(" ".join(token.path))


@register_transform("color/css", kind=TransformKind.VALUE, matcher=_category_is("color"))
def color_css(token: Token, context: TransformContext) -> Any:
    """Normalize hex colors: lowercase, 6 digits, or ``rgba()`` when translucent."""
    if not isinstance(token.value, str):
        return token.value
    match = _HEX_RE.match(token.value.strip())
    if match is None:
        return token.value

    digits = match.group(1).lower()
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) == 8:
        alpha = int(digits[6:], 16)
        if alpha != 255:
            r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
            return f"rgba({r}, {g}, {b}, {round(alpha / 255, 2):g})"
        digits = digits[:6]
    return f"#{digits}"


@register_transform("size/px", kind=TransformKind.VALUE, matcher=_category_is("size"))
def size_px(token: Token, context: TransformContext) -> str:
    return f"{_format_number(_parse_number(token))}px"


@register_transform("size/rem", kind=TransformKind.VALUE, matcher=_category_is("size"))
def size_rem(token: Token, context: TransformContext) -> str:
    return f"{_format_number(_parse_number(token))}rem"


@register_transform("asset/base64", kind=TransformKind.VALUE, matcher=_category_is("asset"))
def asset_base64(token: Token, context: TransformContext) -> str:
    """Replace an asset path with the base64 of the file's bytes."""
    asset_path = context.root / str(token.value)
    try:
        data = asset_path.read_bytes()
    except OSError as e:
        raise TransformError(f"Cannot read asset {asset_path}: {e}", cause=e).with_context(
            path=str(asset_path),
            platform=context.platform.name,
            key=".".join(token.path),
        ) from e
    return base64.b64encode(data).decode("ascii")


register_transform_group("web", ["attribute/cti", "name/cti/kebab", "size/px", "color/css"])
register_transform_group("scss", ["attribute/cti", "name/cti/kebab", "size/rem", "color/css"])
