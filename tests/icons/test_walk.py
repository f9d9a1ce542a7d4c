"""Tests for tokensmith.icons.walk."""

import types

from conftest import write_svg

from tokensmith.icons.walk import IconFile, collect_icon_files, walk_files


class TestWalkFiles:
    def test_recursive_and_sorted(self, tmp_path):
        write_svg(tmp_path / "b.svg")
        write_svg(tmp_path / "nested/deeper/c.svg")
        write_svg(tmp_path / "a.svg")
        (tmp_path / "notes.txt").write_text("x")
        names = [p.relative_to(tmp_path).as_posix() for p in walk_files(tmp_path)]
        assert names == ["a.svg", "b.svg", "nested/deeper/c.svg"]

    def test_missing_directory_yields_nothing(self, tmp_path):
        assert list(walk_files(tmp_path / "nope")) == []

    def test_is_lazy(self, tmp_path):
        assert isinstance(walk_files(tmp_path), types.GeneratorType)

    def test_custom_extension(self, tmp_path):
        (tmp_path / "a.json").write_text("{}")
        write_svg(tmp_path / "b.svg")
        assert [p.name for p in walk_files(tmp_path, ".json")] == ["a.json"]

    def test_symlinked_directory_not_followed(self, tmp_path):
        write_svg(tmp_path / "outline/Home.svg")
        (tmp_path / "outline/loop").symlink_to(tmp_path, target_is_directory=True)
        names = [p.relative_to(tmp_path).as_posix() for p in walk_files(tmp_path)]
        assert names == ["outline/Home.svg"]


def test_collect_icon_files(icon_project):
    files = list(collect_icon_files(icon_project / "assets/icons", icon_project))
    assert files == [
        IconFile(name="Arrow Left", path="assets/icons/outline/Arrow Left.svg"),
        IconFile(name="Home", path="assets/icons/outline/Home.svg"),
        IconFile(name="Home", path="assets/icons/solid/Home.svg"),
    ]
