"""
CLI utility helpers — consoles, root resolution and error output.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from tokensmith.core.errors import TokensmithError
from tokensmith.core.logging import get_logger

console = Console()
err_console = Console(stderr=True)

logger = get_logger(__name__)

ROOT_HELP = "Project root; every configured path is relative to it."
CONFIG_HELP = "YAML configuration file (default: <root>/tokensmith.yaml if present)."


def resolve_root(root: str) -> Path:
    """Absolute project root; it must be an existing directory."""
    path = Path(root).resolve()
    if not path.is_dir():
        err_console.print(f"[bold red]Error[/bold red]: project root {path} is not a directory")
        raise typer.Exit(code=1)
    return path


def fail(error: TokensmithError) -> NoReturn:
    """Print a TokensmithError and exit with status 1."""
    logger.debug("command_failed", **error.to_dict())
    err_console.print(f"[bold red]Error[/bold red] ({error.category.value}): {escape(error.message)}")
    raise typer.Exit(code=1) from error


def format_size(size: int) -> str:
    return f"{size:,} bytes"


def optional_path(value: str | None) -> Path | None:
    return Path(value) if value else None
