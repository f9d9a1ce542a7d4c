"""
CLI: ``tokensmith config`` — inspect the resolved build configuration.
"""

from __future__ import annotations

import json

import typer
from rich.table import Table

from tokensmith.cli.utils import CONFIG_HELP, ROOT_HELP, console, fail, optional_path, resolve_root
from tokensmith.config import load_build_config
from tokensmith.core.errors import TokensmithError
from tokensmith.engine import list_formats, list_transform_groups, list_transforms

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config(
    root: str = typer.Option(".", "--root", "-r", help=ROOT_HELP),
    config: str | None = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
    json_out: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """Show the platforms and files a build would produce."""
    project_root = resolve_root(root)
    try:
        build_config = load_build_config(project_root, optional_path(config))
    except TokensmithError as e:
        fail(e)

    if json_out:
        console.print_json(json.dumps(build_config.to_dict()))
        return

    console.print(f"[bold]Project Root:[/bold] {build_config.root}")
    console.print(f"[bold]Sources:[/bold] {', '.join(build_config.source)}")

    for platform in build_config.platforms.values():
        if platform.transforms is not None:
            transforms = ", ".join(platform.transforms)
        else:
            transforms = platform.transform_group or "none"
        table = Table(title=f"{platform.name}  ({transforms})", title_justify="left")
        table.add_column("Destination", style="cyan")
        table.add_column("Format")
        table.add_column("Filter")
        for file in platform.files:
            table.add_row(
                f"{platform.build_path}{file.destination}",
                file.format,
                json.dumps(file.filter) if file.filter else "-",
            )
        console.print(table)


@app.command("registry")
def show_registry() -> None:
    """List registered transforms, transform groups and formats."""
    console.print(f"[bold]Transforms:[/bold] {', '.join(list_transforms())}")
    console.print(f"[bold]Transform groups:[/bold] {', '.join(list_transform_groups())}")
    console.print(f"[bold]Formats:[/bold] {', '.join(list_formats())}")
