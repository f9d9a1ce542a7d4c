"""Tests for tokensmith.config — built-in table, illustrations and YAML overrides."""

import json
import textwrap
from pathlib import Path

import pytest
from conftest import write_json

from tokensmith.config import (
    BuildConfig,
    BuildConfigSpec,
    FileSpec,
    IconPaths,
    PlatformConfig,
    default_build_config,
    illustration_file_specs,
    load_build_config,
    load_icon_paths,
)
from tokensmith.core.errors import ConfigError, InvalidConfigError


def _write_yaml(path: Path, text: str) -> Path:
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


class TestIllustrationFileSpecs:
    def test_one_spec_per_asset(self, tmp_path):
        path = write_json(
            tmp_path / "illustrations.json",
            {"asset": {"empty_box": {"value": "a.svg"}, "error_not_found_big": {"value": "b.svg"}}},
        )
        specs = illustration_file_specs(path)
        assert specs == (
            FileSpec(
                "illustrations/empty/box.json",
                "json/flat",
                {"attributes": {"category": "asset", "type": "empty_box"}},
            ),
            FileSpec(
                "illustrations/error/not.json",
                "json/flat",
                {"attributes": {"category": "asset", "type": "error_not_found_big"}},
            ),
        )

    def test_key_without_separator_is_rejected(self, tmp_path):
        path = write_json(tmp_path / "illustrations.json", {"asset": {"hero": {"value": "a.svg"}}})
        with pytest.raises(InvalidConfigError, match="hero"):
            illustration_file_specs(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            illustration_file_specs(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "illustrations.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid illustrations file"):
            illustration_file_specs(path)

    def test_missing_asset_object(self, tmp_path):
        path = write_json(tmp_path / "illustrations.json", {"color": {}})
        with pytest.raises(ConfigError, match="no 'asset' object"):
            illustration_file_specs(path)


class TestDefaultBuildConfig:
    def test_platforms_in_build_order(self, token_project):
        config = default_build_config(token_project)
        assert list(config.platforms) == ["json", "scss", "css", "assets/embed/json"]

    def test_scss_files(self, token_project):
        scss = default_build_config(token_project).platforms["scss"]
        assert scss.transform_group == "scss"
        assert scss.build_path == "build/scss/"
        assert [f.destination for f in scss.files] == [
            "theme-light.scss",
            "theme-dark.scss",
            "theme-high-contrast.scss",
            "extended-color.scss",
            "variables.scss",
        ]
        assert scss.files[0].filter == {"attributes": {"category": "color-light"}}

    def test_css_has_no_transforms(self, token_project):
        css = default_build_config(token_project).platforms["css"]
        assert css.transform_group is None
        assert css.transforms is None
        assert css.files == (FileSpec("classes.css", "css/variables"),)

    def test_embed_platform_appends_illustrations(self, token_project):
        embed = default_build_config(token_project).platforms["assets/embed/json"]
        assert embed.transforms == ("attribute/cti", "name/cti/kebab", "asset/base64")
        destinations = [f.destination for f in embed.files]
        assert destinations[:3] == ["assets_icons.json", "assets_emojis.json", "assets_logos.json"]
        assert destinations[-1] == "illustrations/empty/box.json"
        assert len(destinations) == 9

    def test_missing_illustrations_file_fails(self, tmp_path):
        with pytest.raises(ConfigError):
            default_build_config(tmp_path)

    def test_to_dict_is_json_serializable(self, token_project):
        data = default_build_config(token_project).to_dict()
        assert json.loads(json.dumps(data))["platforms"]["json"]["files"] == [
            {"destination": "variables.json", "format": "json/flat", "filter": None}
        ]
        assert data["icons"]["registry"] == "properties/assets/icons.json"

    def test_platforms_are_read_only(self, token_project):
        config = default_build_config(token_project)
        with pytest.raises(TypeError):
            config.platforms["extra"] = config.platforms["css"]

    def test_platforms_copied_from_caller(self, tmp_path):
        platforms = {"css": PlatformConfig(name="css", build_path="build/css/")}
        config = BuildConfig(root=tmp_path, platforms=platforms)
        platforms.clear()
        assert list(config.platforms) == ["css"]

    def test_resolve(self, tmp_path):
        config = BuildConfig(root=tmp_path)
        assert config.resolve("build/json") == tmp_path / "build/json"


class TestYamlConfig:
    def test_full_override(self, tmp_path):
        path = _write_yaml(
            tmp_path / "tokensmith.yaml",
            """
            source:
              - tokens/*.json
            platforms:
              scss:
                transform_group: scss
                build_path: out/scss/
                files:
                  - destination: colors.scss
                    format: scss/variables
                    filter:
                      attributes:
                        category: color
            icons:
              build_dir: dist
            """,
        )
        config = load_build_config(tmp_path, path)
        assert config.source == ("tokens/*.json",)
        assert list(config.platforms) == ["scss"]
        assert config.platforms["scss"].files == (
            FileSpec("colors.scss", "scss/variables", {"attributes": {"category": "color"}}),
        )
        assert config.icons.build_dir == "dist"
        assert config.icons.outline_dir == "assets/icons/outline"

    def test_without_platforms_uses_builtin_table(self, token_project):
        _write_yaml(token_project / "tokensmith.yaml", "icons:\n  build_dir: dist\n")
        config = load_build_config(token_project)
        assert list(config.platforms) == ["json", "scss", "css", "assets/embed/json"]
        assert config.icons.build_dir == "dist"

    def test_illustrations_flag(self, token_project):
        path = _write_yaml(
            token_project / "custom.yaml",
            """
            platforms:
              embed:
                transforms: [attribute/cti, name/cti/kebab]
                build_path: build/embed/
                illustrations: true
            """,
        )
        embed = load_build_config(token_project, path).platforms["embed"]
        assert embed.transforms == ("attribute/cti", "name/cti/kebab")
        assert [f.destination for f in embed.files] == ["illustrations/empty/box.json"]

    def test_unknown_key_rejected(self, tmp_path):
        path = _write_yaml(tmp_path / "tokensmith.yaml", "sources: [a]\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_build_config(tmp_path, path)

    def test_absolute_build_path_rejected(self, tmp_path):
        path = _write_yaml(
            tmp_path / "tokensmith.yaml",
            """
            platforms:
              json:
                build_path: /tmp/out/
            """,
        )
        with pytest.raises(ConfigError):
            BuildConfigSpec.from_yaml_file(path)

    def test_invalid_yaml(self, tmp_path):
        path = _write_yaml(tmp_path / "tokensmith.yaml", "platforms: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_build_config(tmp_path, path)

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read configuration"):
            load_build_config(tmp_path, tmp_path / "missing.yaml")


class TestLoadIconPaths:
    def test_defaults_without_config(self, tmp_path):
        assert load_icon_paths(tmp_path) == IconPaths()

    def test_does_not_need_illustrations(self, tmp_path):
        _write_yaml(tmp_path / "tokensmith.yaml", "icons:\n  registry: tokens/icons.json\n")
        paths = load_icon_paths(tmp_path)
        assert paths.registry == "tokens/icons.json"
