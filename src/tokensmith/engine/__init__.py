"""
Token transform/filter engine.

Loads the token store, applies per-platform transforms, selects tokens
with attribute filters and serializes them with registered formats.
"""

from tokensmith.engine.builder import BuildResult, TokenBuilder
from tokensmith.engine.filters import filter_tokens, matches_filter
from tokensmith.engine.formats import Dictionary, get_format, list_formats, register_format
from tokensmith.engine.tokens import Token, TokenStore, flatten_tokens, load_token_tree
from tokensmith.engine.transforms import (
    TransformContext,
    TransformKind,
    get_transform,
    list_transform_groups,
    list_transforms,
    register_transform,
    register_transform_group,
)

__all__ = [
    "TokenBuilder",
    "BuildResult",
    "Token",
    "TokenStore",
    "load_token_tree",
    "flatten_tokens",
    "matches_filter",
    "filter_tokens",
    "Dictionary",
    "register_format",
    "get_format",
    "list_formats",
    "TransformContext",
    "TransformKind",
    "register_transform",
    "register_transform_group",
    "get_transform",
    "list_transforms",
    "list_transform_groups",
]
