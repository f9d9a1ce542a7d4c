"""
CLI: ``tokensmith build`` — build every platform, then the icon types.
"""

from __future__ import annotations

import typer
from rich.table import Table

from tokensmith.cli.utils import (
    CONFIG_HELP,
    ROOT_HELP,
    console,
    fail,
    format_size,
    optional_path,
    resolve_root,
)
from tokensmith.config import load_build_config
from tokensmith.core.errors import TokensmithError
from tokensmith.engine import TokenBuilder
from tokensmith.icons.typegen import generate_icon_types


def build(
    root: str = typer.Option(".", "--root", "-r", help=ROOT_HELP),
    config: str | None = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
    platform: list[str] | None = typer.Option(
        None,
        "--platform",
        "-p",
        help="Platform to build (repeatable). Builds all platforms if omitted.",
    ),
    skip_icon_types: bool = typer.Option(
        False,
        "--skip-icon-types",
        help="Do not regenerate icons.js / icons.d.ts after the build.",
    ),
) -> None:
    """Build all token platforms and generate the icon type definitions.

    Examples:
        tokensmith build
        tokensmith build -p scss -p css --skip-icon-types
    """
    project_root = resolve_root(root)

    try:
        build_config = load_build_config(project_root, optional_path(config))
        results = TokenBuilder(build_config).build_all_platforms(platform or None)
    except TokensmithError as e:
        fail(e)

    table = Table(title="Build Summary")
    table.add_column("Platform", style="cyan")
    table.add_column("File")
    table.add_column("Format")
    table.add_column("Tokens", justify="right")
    table.add_column("Size", justify="right")
    for result in results:
        table.add_row(
            result.platform,
            str(result.path.relative_to(project_root)),
            result.format,
            str(result.token_count),
            format_size(result.size),
        )
    console.print(table)

    if skip_icon_types:
        return

    console.print("\n[bold blue]Generating icon type definitions...[/bold blue]")
    try:
        generated = generate_icon_types(project_root, build_config.icons)
    except TokensmithError as e:
        fail(e)

    console.print(f"[green]✓[/green] Generated {generated.js_path.relative_to(project_root)}")
    console.print(f"[green]✓[/green] Generated {generated.dts_path.relative_to(project_root)}")
