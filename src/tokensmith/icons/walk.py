"""Lazy recursive walks over icon directories."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

ICON_EXTENSION = ".svg"


@dataclass(frozen=True)
class IconFile:
    """An SVG found on disk.

    Attributes:
        name: File name with the first ``.svg`` removed (not normalized)
        path: POSIX path relative to the project root, as the registry stores it
    """

    name: str
    path: str


def walk_files(directory: Path, extension: str = ICON_EXTENSION) -> Iterator[Path]:
    """Yield every file under ``directory`` whose name ends with ``extension``.

    Entries are visited in sorted order, depth-first. Symlinked directories
    are not followed. A missing directory yields nothing. The generator is
    single-use; call again to re-scan.
    """
    if not directory.is_dir():
        return
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.is_dir() and not entry.is_symlink():
            yield from walk_files(entry, extension)
        elif entry.name.endswith(extension):
            yield entry


def collect_icon_files(icons_dir: Path, root: Path) -> Iterator[IconFile]:
    """Yield an IconFile for every SVG under ``icons_dir``."""
    for path in walk_files(icons_dir):
        yield IconFile(
            name=path.name.replace(ICON_EXTENSION, "", 1),
            path=path.relative_to(root).as_posix(),
        )
