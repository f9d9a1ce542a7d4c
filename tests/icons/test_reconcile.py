"""Tests for tokensmith.icons.reconcile — report, confirmation and inclusion."""

import json

import pytest
from conftest import write_svg
from structlog.testing import capture_logs

from tokensmith.core.errors import RegistryError, RegistryWriteError
from tokensmith.icons.reconcile import (
    include_unregistered,
    infer_registry_key,
    reconcile,
    run_reconciliation,
)
from tokensmith.icons.registry import IconRegistry
from tokensmith.icons.walk import IconFile, collect_icon_files


def _files(root):
    return list(collect_icon_files(root / "assets/icons", root))


def _registry_keys(path):
    return list(json.loads(path.read_text(encoding="utf-8"))["asset"]["icon"])


class TestReconcile:
    def test_classification(self, icon_project, registry_path):
        report = reconcile(IconRegistry.load(registry_path), _files(icon_project))
        assert len(report.files) == 3
        assert report.registered == ("home-outline",)
        assert report.missing == ()
        assert [f.path for f in report.unregistered] == [
            "assets/icons/outline/Arrow Left.svg",
            "assets/icons/solid/Home.svg",
        ]
        assert report.needs_update

    def test_deleted_file_is_missing(self, icon_project, registry_path):
        (icon_project / "assets/icons/outline/Home.svg").unlink()
        report = reconcile(IconRegistry.load(registry_path), _files(icon_project))
        assert report.missing == ("home-outline",)
        assert report.registered == ()


class TestInferRegistryKey:
    def test_outline(self):
        assert infer_registry_key(IconFile("Home", "assets/icons/outline/Home.svg")) == "home-outline"

    def test_solid(self):
        assert infer_registry_key(IconFile("Home", "assets/icons/Solid/Home.svg")) == "home-solid"

    def test_neither_is_logged(self):
        with capture_logs() as logs:
            key = infer_registry_key(IconFile("Star", "assets/icons/misc/Star.svg"))
        assert key == "star-"
        assert logs[0]["event"] == "malformed_registry_key"


class TestIncludeUnregistered:
    def test_adds_sorted_and_saved(self, icon_project, registry_path):
        registry = IconRegistry.load(registry_path)
        added, failed = include_unregistered(registry, _files(icon_project))
        assert added == ["arrow left-outline", "home-solid"]
        assert failed == []
        assert _registry_keys(registry_path) == ["arrow left-outline", "home-outline", "home-solid"]

    def test_second_run_adds_nothing(self, icon_project, registry_path):
        include_unregistered(IconRegistry.load(registry_path), _files(icon_project))
        added, _ = include_unregistered(IconRegistry.load(registry_path), _files(icon_project))
        assert added == []

    def test_write_failure_continues(self, icon_project, registry_path):
        registry = IconRegistry.load(registry_path)

        def failing_save():
            raise RegistryWriteError("disk full")

        registry.save = failing_save
        with capture_logs() as logs:
            added, failed = include_unregistered(registry, _files(icon_project))
        assert failed == added == ["arrow left-outline", "home-solid"]
        assert [log["event"] for log in logs].count("registry_write_failed") == 2


class TestRunReconciliation:
    def test_no_answer_leaves_registry_untouched(self, icon_project, registry_path):
        before = registry_path.read_bytes()
        asked = []

        def confirm(files):
            asked.append([f.path for f in files])
            return False

        outcome = run_reconciliation(icon_project, confirm)
        assert not outcome.confirmed
        assert outcome.added == []
        assert asked == [["assets/icons/outline/Arrow Left.svg", "assets/icons/solid/Home.svg"]]
        assert registry_path.read_bytes() == before

    def test_yes_answer_includes_files(self, icon_project, registry_path):
        outcome = run_reconciliation(icon_project, lambda files: True)
        assert outcome.confirmed
        assert outcome.added == ["arrow left-outline", "home-solid"]
        assert "home-solid" in _registry_keys(registry_path)

    def test_async_confirmation(self, icon_project, registry_path):
        async def confirm(files):
            return True

        outcome = run_reconciliation(icon_project, confirm)
        assert outcome.added == ["arrow left-outline", "home-solid"]

    def test_missing_entries_never_removed(self, icon_project, registry_path):
        (icon_project / "assets/icons/outline/Home.svg").unlink()
        outcome = run_reconciliation(icon_project, lambda files: True)
        assert outcome.report.missing == ("home-outline",)
        assert "home-outline" in _registry_keys(registry_path)

    def test_nothing_to_include_skips_confirmation(self, icon_project, registry_path):
        run_reconciliation(icon_project, lambda files: True)

        def confirm(files):
            raise AssertionError("should not be asked")

        reports = []
        outcome = run_reconciliation(icon_project, confirm, on_report=reports.append)
        assert not outcome.report.needs_update
        assert reports == [outcome.report]

    def test_report_precedes_confirmation(self, icon_project):
        events = []
        run_reconciliation(
            icon_project,
            lambda files: events.append("confirm") or False,
            on_report=lambda report: events.append("report"),
        )
        assert events == ["report", "confirm"]

    def test_missing_registry(self, tmp_path):
        write_svg(tmp_path / "assets/icons/outline/Home.svg")
        with pytest.raises(RegistryError):
            run_reconciliation(tmp_path, lambda files: True)
