"""
Shared pytest fixtures for tokensmith tests.

This module provides:
- A complete token project on disk (sources, registry, illustrations, SVGs)
- Icon tree helpers
- Logging reset between tests

Usage:
    def test_something(token_project):
        builder = TokenBuilder(default_build_config(token_project))
"""

import json
import sys
from pathlib import Path
from typing import Any

import pytest
import structlog

# Ensure tokensmith package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tokensmith.core.logging import clear_context  # noqa: E402

SVG = '<svg xmlns="http://www.w3.org/2000/svg"><path d="M0 0h24v24H0z"/></svg>'


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def write_svg(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(SVG, encoding="utf-8")
    return path


# =============================================================================
# Logging isolation
# =============================================================================


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop any structlog configuration and bound context a test left behind."""
    yield
    clear_context()
    structlog.reset_defaults()


# =============================================================================
# Project fixtures
# =============================================================================


REGISTRY = {
    "asset": {
        "icon": {
            "home-outline": {"value": "assets/icons/outline/Home.svg"},
        }
    }
}

ILLUSTRATIONS = {
    "asset": {
        "empty_box": {"value": "assets/illustrations/empty/box.svg"},
    }
}


@pytest.fixture
def icon_project(tmp_path: Path) -> Path:
    """Icon trees plus a registry that knows only one of the files.

    Layout::

        assets/icons/outline/Home.svg        (registered)
        assets/icons/outline/Arrow Left.svg
        assets/icons/solid/Home.svg
        properties/assets/icons.json
    """
    write_svg(tmp_path / "assets/icons/outline/Home.svg")
    write_svg(tmp_path / "assets/icons/outline/Arrow Left.svg")
    write_svg(tmp_path / "assets/icons/solid/Home.svg")
    write_json(tmp_path / "properties/assets/icons.json", REGISTRY)
    return tmp_path


@pytest.fixture
def token_project(icon_project: Path) -> Path:
    """A complete project the default build configuration can build."""
    root = icon_project
    write_json(root / "properties/assets/illustrations.json", ILLUSTRATIONS)
    write_svg(root / "assets/illustrations/empty/box.svg")
    write_json(
        root / "properties/color/base.json",
        {
            "color": {
                "primary": {"value": "#0055FF", "comment": "Brand"},
                "white": {"value": "#fff"},
            }
        },
    )
    write_json(
        root / "properties/color/theme.json",
        {
            "background": {"value": "#fff", "attributes": {"category": "color-light"}},
            "surface": {"value": "#000", "attributes": {"category": "color-dark"}},
        },
    )
    write_json(root / "properties/size/base.json", {"size": {"small": {"value": "4"}}})
    return root


@pytest.fixture
def registry_path(icon_project: Path) -> Path:
    return icon_project / "properties/assets/icons.json"
