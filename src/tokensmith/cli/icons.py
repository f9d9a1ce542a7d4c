"""
CLI: ``tokensmith icons`` — icon type generation and registry sync.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from tokensmith.cli.utils import CONFIG_HELP, ROOT_HELP, console, fail, optional_path, resolve_root
from tokensmith.config import load_icon_paths
from tokensmith.core.errors import TokensmithError
from tokensmith.icons.reconcile import ReconciliationReport, run_reconciliation
from tokensmith.icons.typegen import generate_icon_types
from tokensmith.icons.walk import IconFile

app = typer.Typer(no_args_is_help=True)


@app.command("types")
def icon_types(
    root: str = typer.Option(".", "--root", "-r", help=ROOT_HELP),
    config: str | None = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
) -> None:
    """Generate icons.js and icons.d.ts from the outline/solid SVG trees."""
    project_root = resolve_root(root)
    console.print("[blue][Icon Types Generator][/blue] Scanning filesystem...")

    try:
        paths = load_icon_paths(project_root, optional_path(config))
        result = generate_icon_types(project_root, paths)
    except TokensmithError as e:
        fail(e)

    inventory = result.inventory
    console.print(f"[cyan][✓][/cyan] Found {len(inventory.outline)} outline icons")
    console.print(f"[cyan][✓][/cyan] Found {len(inventory.solid)} solid icons")
    console.print(f"[cyan][✓][/cyan] Total unique icons: {len(inventory)}")
    console.print(f"[green][✓][/green] Generated {result.js_path.relative_to(project_root)}")
    console.print(f"[green][✓][/green] Generated {result.dts_path.relative_to(project_root)}")
    console.print("[black on green][Success][/black on green] Icon types generated successfully!")


def _print_report(report: ReconciliationReport, registry_name: str) -> None:
    console.print(f"[blue]\\[#] {len(report.files)} files were found.[/blue]")
    console.print(f"[cyan]\\[#] There are {len(report.registered)} icons installed correctly.[/cyan]")
    console.print(f"[red]\\[#] There are {len(report.missing)} files not found.[/red]")
    for key in report.missing:
        console.print(f"    [dim]{escape(key)}[/dim]")
    console.print(
        f"[yellow]\\[#] There are {len(report.unregistered)} files not included in {registry_name}.[/yellow]"
    )
    for file in report.unregistered:
        console.print(f"    [dim]{escape(file.path)}[/dim]", highlight=False)


@app.command("sync")
def icon_sync(
    root: str = typer.Option(".", "--root", "-r", help=ROOT_HELP),
    config: str | None = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
    yes: bool = typer.Option(False, "--yes", "-y", help="Include unregistered files without asking."),
) -> None:
    """Reconcile the icon registry with the SVG files on disk.

    Reports registry entries whose file is gone and files with no entry,
    then offers to add the missing entries.
    """
    project_root = resolve_root(root)

    try:
        paths = load_icon_paths(project_root, optional_path(config))
    except TokensmithError as e:
        fail(e)

    registry_name = Path(paths.registry).name

    def confirm(files: list[IconFile]) -> bool:
        if yes:
            return True
        return typer.confirm(f"Would you like to include these files into {registry_name}?", default=False)

    try:
        outcome = run_reconciliation(
            project_root,
            confirm,
            paths=paths,
            on_report=lambda report: _print_report(report, registry_name),
        )
    except TokensmithError as e:
        fail(e)

    if not outcome.report.needs_update:
        return

    if outcome.added:
        console.print(f"[green]Added {len(outcome.added)} entries to {registry_name}.[/green]")
    if outcome.failed:
        console.print(f"[red]{len(outcome.failed)} entries could not be written.[/red]")
    console.print("[black on green]Done.[/black on green]")
