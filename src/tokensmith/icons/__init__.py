"""
Icon tooling: type generation from the SVG trees and registry reconciliation.
"""

from tokensmith.icons.reconcile import (
    ReconciliationOutcome,
    ReconciliationReport,
    include_unregistered,
    infer_registry_key,
    reconcile,
    run_reconciliation,
)
from tokensmith.icons.registry import IconRegistry
from tokensmith.icons.typegen import (
    IconInventory,
    generate_icon_types,
    normalize_icon_name,
    render_icon_declarations,
    render_icon_module,
    scan_icon_names,
)
from tokensmith.icons.walk import IconFile, collect_icon_files, walk_files

__all__ = [
    "IconFile",
    "walk_files",
    "collect_icon_files",
    "normalize_icon_name",
    "scan_icon_names",
    "IconInventory",
    "render_icon_module",
    "render_icon_declarations",
    "generate_icon_types",
    "IconRegistry",
    "ReconciliationReport",
    "ReconciliationOutcome",
    "reconcile",
    "infer_registry_key",
    "include_unregistered",
    "run_reconciliation",
]
