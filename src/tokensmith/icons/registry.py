"""
Icon registry: the hand-maintained ``icons.json`` token file.

Shape::

    {"asset": {"icon": {"home-outline": {"value": "assets/icons/outline/Home.svg"}}}}

The registry is loaded into memory, modified through ``add``/``sort`` and
written back explicitly with ``save``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tokensmith.core.errors import RegistryError, RegistryWriteError
from tokensmith.core.logging import get_logger

logger = get_logger(__name__)

OUTLINE_MARKER = "-outline"
SOLID_MARKER = "-solid"


@dataclass
class IconRegistry:
    """In-memory copy of the icon registry file."""

    path: Path
    data: dict[str, Any]

    @classmethod
    def load(cls, path: Path) -> IconRegistry:
        """Read and validate the registry file.

        Raises:
            RegistryError: File missing, not JSON, or without ``asset.icon``
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise RegistryError(f"Icon registry not found: {path}", cause=e).with_context(path=str(path)) from e
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise RegistryError(f"Invalid icon registry {path}: {e}", cause=e).with_context(path=str(path)) from e

        asset = data.get("asset") if isinstance(data, dict) else None
        icons = asset.get("icon") if isinstance(asset, dict) else None
        if not isinstance(icons, dict):
            raise RegistryError(f"Icon registry {path} has no 'asset.icon' object").with_context(path=str(path))
        return cls(path=Path(path), data=data)

    @property
    def icons(self) -> dict[str, Any]:
        return self.data["asset"]["icon"]

    def entries(self) -> dict[str, str | None]:
        """Registry key to registered file path."""
        return {
            key: entry.get("value") if isinstance(entry, dict) else None
            for key, entry in self.icons.items()
        }

    def registered_paths(self) -> set[str]:
        return {value for value in self.entries().values() if value is not None}

    def add(self, key: str, path: str) -> None:
        self.icons[key] = {"value": path}

    def sort(self) -> None:
        """Order keys: outline keys sorted, then solid keys sorted.

        Keys matching neither group (such as the malformed ``<name>-`` key)
        are not discarded: they keep their relative order at the end so that
        no entry is ever dropped from the registry.
        """
        keys = list(self.icons)
        outline = sorted(k for k in keys if OUTLINE_MARKER in k)
        solid = sorted(k for k in keys if SOLID_MARKER in k and OUTLINE_MARKER not in k)
        grouped = set(outline) | set(solid)
        other = [k for k in keys if k not in grouped]
        if other:
            logger.warning("registry_keys_ungrouped", keys=other)

        icons = self.icons
        self.data["asset"]["icon"] = {k: icons[k] for k in outline + solid + other}

    def dumps(self) -> str:
        """Serialized registry: two-space indent, no trailing newline."""
        return json.dumps(self.data, indent=2, ensure_ascii=False)

    def save(self) -> None:
        """Overwrite the registry file.

        Raises:
            RegistryWriteError: The file could not be written
        """
        try:
            self.path.write_text(self.dumps(), encoding="utf-8")
        except OSError as e:
            raise RegistryWriteError(f"Cannot write icon registry {self.path}: {e}", cause=e).with_context(
                path=str(self.path)
            ) from e
        logger.debug("registry_saved", path=str(self.path), entries=len(self.icons))
