"""
Configuration for tokensmith builds.

The build configuration is an immutable value: it is constructed once at
startup (from the built-in platform table or from ``tokensmith.yaml``) and
passed explicitly to the builder and the icon tools.

Example YAML::

    source:
      - properties/**/*.json
    platforms:
      scss:
        transform_group: scss
        build_path: build/scss/
        files:
          - destination: variables.scss
            format: scss/variables
            filter:
              attributes:
                category: color
      assets/embed/json:
        transforms: [attribute/cti, name/cti/kebab, asset/base64]
        build_path: build/json/
        illustrations: true
        files: []
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tokensmith.core.errors import ConfigError, InvalidConfigError
from tokensmith.core.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILE_NAME = "tokensmith.yaml"
DEFAULT_SOURCE = ("properties/**/*.json",)
ILLUSTRATIONS_FILE = "properties/assets/illustrations.json"


# =============================================================================
# Immutable configuration values
# =============================================================================


@dataclass(frozen=True)
class FileSpec:
    """One output file of a platform.

    Attributes:
        destination: Path relative to the platform build path
        format: Registered format name (e.g. ``json/flat``)
        filter: Partial token match, e.g. ``{"attributes": {"category": "color"}}``
    """

    destination: str
    format: str
    filter: dict[str, Any] | None = None


@dataclass(frozen=True)
class PlatformConfig:
    """One output platform: its transforms and its files."""

    name: str
    build_path: str
    files: tuple[FileSpec, ...] = ()
    transform_group: str | None = None
    transforms: tuple[str, ...] | None = None


@dataclass(frozen=True)
class IconPaths:
    """Conventional icon locations, relative to the project root."""

    outline_dir: str = "assets/icons/outline"
    solid_dir: str = "assets/icons/solid"
    icons_dir: str = "assets/icons"
    registry: str = "properties/assets/icons.json"
    build_dir: str = "build"


@dataclass(frozen=True)
class BuildConfig:
    """Complete build configuration.

    Attributes:
        root: Project root every relative path is resolved against
        source: Glob patterns of token source files
        platforms: Platform name to platform configuration, in build order
            (read-only)
        icons: Icon tree and registry locations
    """

    root: Path
    source: tuple[str, ...] = DEFAULT_SOURCE
    platforms: Mapping[str, PlatformConfig] = field(default_factory=dict)
    icons: IconPaths = field(default_factory=IconPaths)

    def __post_init__(self):
        object.__setattr__(self, "platforms", MappingProxyType(dict(self.platforms)))

    def resolve(self, relative: str) -> Path:
        """Resolve a configured path against the project root."""
        return self.root / relative

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a plain dictionary (for ``config show --json``)."""
        return {
            "root": str(self.root),
            "source": list(self.source),
            "platforms": {
                name: {
                    "transform_group": platform.transform_group,
                    "transforms": list(platform.transforms) if platform.transforms is not None else None,
                    "build_path": platform.build_path,
                    "files": [
                        {"destination": f.destination, "format": f.format, "filter": f.filter}
                        for f in platform.files
                    ],
                }
                for name, platform in self.platforms.items()
            },
            "icons": {
                "outline_dir": self.icons.outline_dir,
                "solid_dir": self.icons.solid_dir,
                "icons_dir": self.icons.icons_dir,
                "registry": self.icons.registry,
                "build_dir": self.icons.build_dir,
            },
        }


# =============================================================================
# Built-in platform table
# =============================================================================


def _category(category: str, type_: str | None = None) -> dict[str, Any]:
    attributes = {"category": category}
    if type_ is not None:
        attributes["type"] = type_
    return {"attributes": attributes}


def illustration_file_specs(illustrations_file: Path) -> tuple[FileSpec, ...]:
    """Generate one file spec per illustration asset.

    Every key ``<group>_<name>`` of the ``asset`` object becomes
    ``illustrations/<group>/<name>.json`` filtered to that exact type.
    Only the first two underscore-separated parts are used.

    Raises:
        ConfigError: If the illustrations file is missing or unparsable
        InvalidConfigError: If a key has no ``_`` separator
    """
    try:
        data = json.loads(illustrations_file.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(
            f"Illustrations file not found: {illustrations_file}", cause=e
        ).with_context(path=str(illustrations_file)) from e
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid illustrations file {illustrations_file}: {e}", cause=e
        ).with_context(path=str(illustrations_file)) from e

    assets = data.get("asset") if isinstance(data, dict) else None
    if not isinstance(assets, dict):
        raise ConfigError(
            f"Illustrations file {illustrations_file} has no 'asset' object"
        ).with_context(path=str(illustrations_file))

    specs = []
    for key in assets:
        parts = key.split("_")
        if len(parts) < 2:
            raise InvalidConfigError(
                "illustrations", key, f"Illustration key {key!r} is not of the form <group>_<name>"
            )
        specs.append(
            FileSpec(
                destination=f"illustrations/{parts[0]}/{parts[1]}.json",
                format="json/flat",
                filter=_category("asset", key),
            )
        )
    return tuple(specs)


def default_platforms(root: Path) -> dict[str, PlatformConfig]:
    """The built-in platform table."""
    embed_files = (
        FileSpec("assets_icons.json", "json/flat", _category("asset", "icon")),
        FileSpec("assets_emojis.json", "json/flat", _category("asset", "emoji")),
        FileSpec("assets_logos.json", "json/flat", _category("asset", "logo")),
        FileSpec("colors.json", "json/flat", _category("color")),
        FileSpec("theme-light.json", "json/flat", _category("color-light")),
        FileSpec("theme-dark.json", "json/flat", _category("color-dark")),
        FileSpec("theme-high-contrast.json", "json/flat", _category("color-high-contrast")),
        FileSpec("extended-color.json", "json/flat", _category("color-extended")),
    ) + illustration_file_specs(root / ILLUSTRATIONS_FILE)

    return {
        "json": PlatformConfig(
            name="json",
            transform_group="web",
            build_path="build/json/",
            files=(FileSpec("variables.json", "json/flat"),),
        ),
        "scss": PlatformConfig(
            name="scss",
            transform_group="scss",
            build_path="build/scss/",
            files=(
                FileSpec("theme-light.scss", "scss/variables", _category("color-light")),
                FileSpec("theme-dark.scss", "scss/variables", _category("color-dark")),
                FileSpec("theme-high-contrast.scss", "scss/variables", _category("color-high-contrast")),
                FileSpec("extended-color.scss", "scss/variables", _category("color-extended")),
                FileSpec("variables.scss", "scss/variables", _category("color")),
            ),
        ),
        "css": PlatformConfig(
            name="css",
            build_path="build/css/",
            files=(FileSpec("classes.css", "css/variables"),),
        ),
        "assets/embed/json": PlatformConfig(
            name="assets/embed/json",
            transforms=("attribute/cti", "name/cti/kebab", "asset/base64"),
            build_path="build/json/",
            files=embed_files,
        ),
    }


def default_build_config(root: Path) -> BuildConfig:
    """Build configuration using the built-in platform table."""
    root = Path(root)
    return BuildConfig(root=root, platforms=default_platforms(root))


# =============================================================================
# YAML configuration models
# =============================================================================


class FileSpecModel(BaseModel):
    """One ``files`` entry of a platform."""

    model_config = ConfigDict(extra="forbid")

    destination: str = Field(..., min_length=1, description="Output path under build_path")
    format: str = Field(..., min_length=1, description="Registered format name")
    filter: dict[str, Any] | None = Field(default=None, description="Partial token match")

    def to_file_spec(self) -> FileSpec:
        return FileSpec(destination=self.destination, format=self.format, filter=self.filter)


class PlatformSpec(BaseModel):
    """One platform of the YAML configuration."""

    model_config = ConfigDict(extra="forbid")

    transform_group: str | None = None
    transforms: list[str] | None = None
    build_path: str = Field(..., min_length=1)
    illustrations: bool = Field(
        default=False,
        description="Append one json/flat file per illustration asset",
    )
    files: list[FileSpecModel] = Field(default_factory=list)

    @field_validator("build_path")
    @classmethod
    def validate_build_path(cls, v: str) -> str:
        if Path(v).is_absolute():
            raise ValueError("build_path must be relative to the project root")
        return v


class IconPathsSpec(BaseModel):
    """Icon locations of the YAML configuration."""

    model_config = ConfigDict(extra="forbid")

    outline_dir: str = IconPaths.outline_dir
    solid_dir: str = IconPaths.solid_dir
    icons_dir: str = IconPaths.icons_dir
    registry: str = IconPaths.registry
    build_dir: str = IconPaths.build_dir


class BuildConfigSpec(BaseModel):
    """Root model of ``tokensmith.yaml``."""

    model_config = ConfigDict(extra="forbid")

    source: list[str] = Field(default_factory=lambda: list(DEFAULT_SOURCE), min_length=1)
    platforms: dict[str, PlatformSpec] | None = None
    icons: IconPathsSpec = Field(default_factory=IconPathsSpec)

    def to_build_config(self, root: Path) -> BuildConfig:
        """Convert the validated spec to an immutable BuildConfig.

        Without a ``platforms`` table the built-in one is used.
        """
        if self.platforms is None:
            platforms = default_platforms(root)
        else:
            platforms = {}
            for name, spec in self.platforms.items():
                files = tuple(f.to_file_spec() for f in spec.files)
                if spec.illustrations:
                    files += illustration_file_specs(root / ILLUSTRATIONS_FILE)
                platforms[name] = PlatformConfig(
                    name=name,
                    build_path=spec.build_path,
                    files=files,
                    transform_group=spec.transform_group,
                    transforms=tuple(spec.transforms) if spec.transforms is not None else None,
                )

        return BuildConfig(
            root=root,
            source=tuple(self.source),
            platforms=platforms,
            icons=IconPaths(**self.icons.model_dump()),
        )

    @classmethod
    def from_yaml_file(cls, path: Path) -> BuildConfigSpec:
        """Load and validate a YAML configuration file.

        Raises:
            ConfigError: If the file is unreadable, not YAML, or off-schema
        """
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read configuration {path}: {e}", cause=e).with_context(
                path=str(path)
            ) from e

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}", cause=e).with_context(path=str(path)) from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}", cause=e).with_context(
                path=str(path)
            ) from e


def load_build_config(root: Path, config_path: Path | None = None) -> BuildConfig:
    """Resolve the build configuration for a project.

    Uses ``config_path`` if given, else ``<root>/tokensmith.yaml`` if it
    exists, else the built-in platform table.
    """
    root = Path(root)
    if config_path is None:
        candidate = root / CONFIG_FILE_NAME
        config_path = candidate if candidate.exists() else None

    if config_path is None:
        logger.debug("config_default", root=str(root))
        return default_build_config(root)

    logger.debug("config_loaded", path=str(config_path))
    return BuildConfigSpec.from_yaml_file(Path(config_path)).to_build_config(root)


def load_icon_paths(root: Path, config_path: Path | None = None) -> IconPaths:
    """Resolve only the icon locations, without building the platform table."""
    root = Path(root)
    if config_path is None:
        candidate = root / CONFIG_FILE_NAME
        config_path = candidate if candidate.exists() else None

    if config_path is None:
        return IconPaths()

    spec = BuildConfigSpec.from_yaml_file(Path(config_path))
    return IconPaths(**spec.icons.model_dump())
