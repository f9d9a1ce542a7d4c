"""Tests for tokensmith.icons.registry."""

import pytest
from conftest import write_json

from tokensmith.core.errors import RegistryError, RegistryWriteError
from tokensmith.icons.registry import IconRegistry


class TestLoad:
    def test_entries(self, registry_path):
        registry = IconRegistry.load(registry_path)
        assert registry.entries() == {"home-outline": "assets/icons/outline/Home.svg"}
        assert registry.registered_paths() == {"assets/icons/outline/Home.svg"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(RegistryError, match="not found"):
            IconRegistry.load(tmp_path / "icons.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "icons.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(RegistryError, match="Invalid icon registry"):
            IconRegistry.load(path)

    def test_missing_icon_object(self, tmp_path):
        path = write_json(tmp_path / "icons.json", {"asset": {}})
        with pytest.raises(RegistryError, match="asset.icon"):
            IconRegistry.load(path)

    def test_asset_not_an_object(self, tmp_path):
        path = write_json(tmp_path / "icons.json", {"asset": []})
        with pytest.raises(RegistryError, match="asset.icon"):
            IconRegistry.load(path)

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "icons.json"
        path.write_bytes(b"\xff\xfe{}")
        with pytest.raises(RegistryError, match="Invalid icon registry"):
            IconRegistry.load(path)

    def test_entry_without_value(self, tmp_path):
        path = write_json(tmp_path / "icons.json", {"asset": {"icon": {"odd-outline": {"comment": "x"}}}})
        assert IconRegistry.load(path).entries() == {"odd-outline": None}


class TestSort:
    def test_outline_then_solid(self, tmp_path):
        path = write_json(
            tmp_path / "icons.json",
            {
                "asset": {
                    "icon": {
                        "star-solid": {"value": "s/star.svg"},
                        "home-outline": {"value": "o/home.svg"},
                        "arrow-outline": {"value": "o/arrow.svg"},
                        "home-solid": {"value": "s/home.svg"},
                    }
                }
            },
        )
        registry = IconRegistry.load(path)
        registry.sort()
        assert list(registry.icons) == ["arrow-outline", "home-outline", "home-solid", "star-solid"]

    def test_ungrouped_keys_kept_at_end(self, tmp_path):
        path = write_json(
            tmp_path / "icons.json",
            {"asset": {"icon": {"star-": {"value": "x.svg"}, "home-outline": {"value": "o/home.svg"}}}},
        )
        registry = IconRegistry.load(path)
        registry.sort()
        assert list(registry.icons) == ["home-outline", "star-"]


class TestSave:
    def test_two_space_indent_without_trailing_newline(self, registry_path):
        registry = IconRegistry.load(registry_path)
        registry.add("home-solid", "assets/icons/solid/Home.svg")
        registry.save()
        content = registry_path.read_text(encoding="utf-8")
        assert content.startswith('{\n  "asset": {\n    "icon": {')
        assert not content.endswith("\n")
        assert IconRegistry.load(registry_path).entries()["home-solid"] == "assets/icons/solid/Home.svg"

    def test_write_failure(self, tmp_path):
        registry = IconRegistry(path=tmp_path, data={"asset": {"icon": {}}})
        with pytest.raises(RegistryWriteError) as exc_info:
            registry.save()
        assert exc_info.value.context.path == str(tmp_path)
