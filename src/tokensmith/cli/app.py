"""
Root Typer application for the tokensmith CLI.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

import typer
from typer import Typer

from tokensmith.core.logging import configure_logging

app = Typer(
    name="tokensmith",
    help="tokensmith — design token builds and icon tooling.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        try:
            v = pkg_version("tokensmith")
        except PackageNotFoundError:
            v = "0.1.0"
        typer.echo(f"tokensmith {v}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    log_json: bool = typer.Option(False, "--log-json", help="Emit logs as JSON lines."),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """tokensmith CLI — build token platforms, generate icon types, sync the icon registry."""
    configure_logging(
        level="DEBUG" if verbose else "WARNING",
        json_format=True if log_json else None,
        force=True,
    )


# ── Sub-command registration ─────────────────────────────────────────────

from tokensmith.cli.build import build  # noqa: E402
from tokensmith.cli.config import app as config_app  # noqa: E402
from tokensmith.cli.icons import app as icons_app  # noqa: E402

app.command("build")(build)
app.add_typer(icons_app, name="icons", help="Icon type generation and registry sync.")
app.add_typer(config_app, name="config", help="Configuration inspection.")
