"""
Icon type generation.

Scans the outline and solid icon trees and writes two artifacts into the
build directory:

- ``icons.js``: the sorted name lists plus ``isOutlineIcon``,
  ``isSolidIcon`` and ``isValidIcon`` backed by ``Set`` lookups
- ``icons.d.ts``: each list as a string-literal union type and the
  predicates typed as narrowing guards

Zero icons across both trees is fatal: nothing is written.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from tokensmith.config import IconPaths
from tokensmith.core.errors import NoIconsFoundError
from tokensmith.core.logging import get_logger
from tokensmith.icons.walk import ICON_EXTENSION, walk_files

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"
JS_FILE_NAME = "icons.js"
DTS_FILE_NAME = "icons.d.ts"

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_icon_name(filename: str) -> str:
    """Canonical icon name: extension stripped, whitespace to ``-``, lowercase.

    >>> normalize_icon_name("Arrow Left.svg")
    'arrow-left'
    """
    if filename.endswith(ICON_EXTENSION):
        filename = filename[: -len(ICON_EXTENSION)]
    return _WHITESPACE_RE.sub("-", filename).lower()


def scan_icon_names(directory: Path) -> list[str]:
    """Sorted, de-duplicated icon names under ``directory``.

    Two files normalizing to the same name are logged as a collision; the
    name is listed once.
    """
    seen: dict[str, Path] = {}
    for path in walk_files(directory):
        name = normalize_icon_name(path.name)
        if name in seen:
            logger.warning(
                "icon_name_collision",
                name=name,
                first=str(seen[name]),
                second=str(path),
            )
            continue
        seen[name] = path
    return sorted(seen)


@dataclass(frozen=True)
class IconInventory:
    """Icon names per variant, with the set lookups the predicates use."""

    outline: tuple[str, ...]
    solid: tuple[str, ...]
    _outline_set: frozenset[str] = field(init=False, repr=False, compare=False)
    _solid_set: frozenset[str] = field(init=False, repr=False, compare=False)
    _all_set: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_outline_set", frozenset(self.outline))
        object.__setattr__(self, "_solid_set", frozenset(self.solid))
        object.__setattr__(self, "_all_set", self._outline_set | self._solid_set)

    @classmethod
    def from_names(cls, outline: Iterable[str], solid: Iterable[str]) -> IconInventory:
        return cls(outline=tuple(sorted(set(outline))), solid=tuple(sorted(set(solid))))

    @property
    def all(self) -> tuple[str, ...]:
        """Sorted union of both variants, duplicates removed by name."""
        return tuple(sorted(self._all_set))

    def is_outline_icon(self, name: str) -> bool:
        return name in self._outline_set

    def is_solid_icon(self, name: str) -> bool:
        return name in self._solid_set

    def is_valid_icon(self, name: str) -> bool:
        return name in self._all_set

    def __len__(self) -> int:
        return len(self._all_set)


def scan_inventory(root: Path, paths: IconPaths) -> IconInventory:
    """Scan both variant trees. Missing directories count as empty."""
    return IconInventory(
        outline=tuple(scan_icon_names(root / paths.outline_dir)),
        solid=tuple(scan_icon_names(root / paths.solid_dir)),
    )


def union_type(names: Iterable[str]) -> str:
    """``"a" | "b"``; ``never`` for no names."""
    names = list(names)
    if not names:
        return "never"
    return " | ".join(json.dumps(name, ensure_ascii=False) for name in names)


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        keep_trailing_newline=True,
    )


def _template_context(inventory: IconInventory, paths: IconPaths) -> dict[str, str]:
    return {
        "source": paths.icons_dir,
        "outline_dir": paths.outline_dir,
        "solid_dir": paths.solid_dir,
        "outline_json": json.dumps(list(inventory.outline), indent=2, ensure_ascii=False),
        "solid_json": json.dumps(list(inventory.solid), indent=2, ensure_ascii=False),
        "outline_type": union_type(inventory.outline),
        "solid_type": union_type(inventory.solid),
        "all_type": union_type(inventory.all),
    }


def render_icon_module(inventory: IconInventory, paths: IconPaths | None = None) -> str:
    """Render the runtime data module (``icons.js``)."""
    template = _environment().get_template("icons.js.j2")
    return template.render(**_template_context(inventory, paths or IconPaths()))


def render_icon_declarations(inventory: IconInventory, paths: IconPaths | None = None) -> str:
    """Render the type declaration module (``icons.d.ts``)."""
    template = _environment().get_template("icons.d.ts.j2")
    return template.render(**_template_context(inventory, paths or IconPaths()))


@dataclass(frozen=True)
class IconTypesResult:
    inventory: IconInventory
    js_path: Path
    dts_path: Path


def generate_icon_types(root: Path, paths: IconPaths | None = None) -> IconTypesResult:
    """Scan the icon trees and write ``icons.js`` and ``icons.d.ts``.

    Raises:
        NoIconsFoundError: Both trees are empty or missing; nothing is written
    """
    paths = paths or IconPaths()
    logger.info("icon_scan_started", outline=paths.outline_dir, solid=paths.solid_dir)

    inventory = scan_inventory(root, paths)
    logger.info(
        "icon_scan_finished",
        outline=len(inventory.outline),
        solid=len(inventory.solid),
        unique=len(inventory),
    )

    if len(inventory) == 0:
        raise NoIconsFoundError(
            f"No icons found in {paths.outline_dir} or {paths.solid_dir}"
        ).with_context(path=str(root / paths.icons_dir))

    build_dir = root / paths.build_dir
    build_dir.mkdir(parents=True, exist_ok=True)

    js_path = build_dir / JS_FILE_NAME
    js_path.write_text(render_icon_module(inventory, paths), encoding="utf-8")
    logger.info("file_written", path=str(js_path))

    dts_path = build_dir / DTS_FILE_NAME
    dts_path.write_text(render_icon_declarations(inventory, paths), encoding="utf-8")
    logger.info("file_written", path=str(dts_path))

    return IconTypesResult(inventory=inventory, js_path=js_path, dts_path=dts_path)
