"""
CLI layer for tokensmith.

Provides a Typer application whose commands delegate to the engine and
icon packages. This package handles only terminal transport: argument
parsing, coloured output and table formatting.

Entry point::

    tokensmith --help
"""

from tokensmith.cli.app import app

__all__ = ["app"]
