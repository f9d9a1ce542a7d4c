"""
Icon registry reconciliation.

Cross-references the SVG files on disk with the hand-maintained registry:

- registered:   registry entries whose file exists
- missing:      registry entries whose file is gone (reported, never removed)
- unregistered: files on disk with no registry entry

Unregistered files are added only after the confirmation port says yes.
The port is a plain callable so the flow runs without a terminal in tests.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from tokensmith.config import IconPaths
from tokensmith.core.errors import RegistryWriteError
from tokensmith.core.logging import get_logger
from tokensmith.icons.registry import OUTLINE_MARKER, SOLID_MARKER, IconRegistry
from tokensmith.icons.walk import IconFile, collect_icon_files

logger = get_logger(__name__)

ConfirmPort = Callable[[list[IconFile]], "bool | Awaitable[bool]"]


@dataclass(frozen=True)
class ReconciliationReport:
    """Outcome of comparing the registry with the files on disk."""

    files: tuple[IconFile, ...]
    registered: tuple[str, ...]
    missing: tuple[str, ...]
    unregistered: tuple[IconFile, ...]

    @property
    def needs_update(self) -> bool:
        return bool(self.unregistered)


@dataclass
class ReconciliationOutcome:
    """What a full run did."""

    report: ReconciliationReport
    confirmed: bool = False
    added: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def reconcile(registry: IconRegistry, files: Iterable[IconFile]) -> ReconciliationReport:
    """Classify registry entries and files by exact relative-path match."""
    files = tuple(files)
    on_disk = {f.path for f in files}
    registered_paths = registry.registered_paths()

    registered, missing = [], []
    for key, value in registry.entries().items():
        (registered if value in on_disk else missing).append(key)

    unregistered = tuple(f for f in files if f.path not in registered_paths)
    return ReconciliationReport(
        files=files,
        registered=tuple(registered),
        missing=tuple(missing),
        unregistered=unregistered,
    )


def infer_registry_key(file: IconFile) -> str:
    """``<name>-outline`` or ``<name>-solid`` from the file's path.

    The variant comes from a case-insensitive substring test on the path,
    outline first. A path containing neither yields ``<name>-``.
    """
    lowered = file.path.lower()
    if "outline" in lowered:
        suffix = OUTLINE_MARKER
    elif "solid" in lowered:
        suffix = SOLID_MARKER
    else:
        suffix = "-"
    key = file.name.lower() + suffix
    if suffix == "-":
        logger.warning("malformed_registry_key", key=key, path=file.path)
    return key


def include_unregistered(registry: IconRegistry, files: Iterable[IconFile]) -> tuple[list[str], list[str]]:
    """Add every file without a registry entry, saving after each insertion.

    A failed save is logged and the remaining files are still processed.

    Returns:
        (keys added, keys whose save failed)
    """
    registered_paths = registry.registered_paths()
    added, failed = [], []

    for file in files:
        if file.path in registered_paths:
            continue
        key = infer_registry_key(file)
        registry.add(key, file.path)
        registry.sort()
        added.append(key)
        try:
            registry.save()
        except RegistryWriteError as e:
            logger.error("registry_write_failed", key=key, **e.to_dict())
            failed.append(key)
        else:
            logger.info("registry_entry_added", key=key, path=file.path)

    return added, failed


def _resolve_answer(answer: bool | Awaitable[bool]) -> bool:
    if inspect.isawaitable(answer):
        async def _wait() -> bool:
            return await answer

        return bool(asyncio.run(_wait()))
    return bool(answer)


def run_reconciliation(
    root: Path,
    confirm: ConfirmPort,
    paths: IconPaths | None = None,
    on_report: Callable[[ReconciliationReport], None] | None = None,
) -> ReconciliationOutcome:
    """Load the registry, scan the icon tree, reconcile, and maybe include.

    ``on_report`` is called with the report before the confirmation port,
    so a caller can print the counts first. ``confirm`` is only called when
    there is something to include.
    """
    paths = paths or IconPaths()
    registry = IconRegistry.load(root / paths.registry)
    files = list(collect_icon_files(root / paths.icons_dir, root))

    report = reconcile(registry, files)
    logger.info(
        "icons_reconciled",
        files=len(report.files),
        registered=len(report.registered),
        missing=len(report.missing),
        unregistered=len(report.unregistered),
    )
    if on_report is not None:
        on_report(report)

    outcome = ReconciliationOutcome(report=report)
    if not report.needs_update:
        return outcome

    outcome.confirmed = _resolve_answer(confirm(list(report.unregistered)))
    if outcome.confirmed:
        outcome.added, outcome.failed = include_unregistered(registry, files)
    return outcome
