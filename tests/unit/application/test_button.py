"""Unit tests – ExportButton enabled/visible state."""
from __future__ import annotations

import asyncio

from structlog.testing import capture_logs

from sheet_export.application.export import ExportButton, ExportConfiguration
from sheet_export.testing.fakes import (
    InMemoryDataSource,
    InMemoryNotifier,
    RecordingSpreadsheetBuilder,
    ScriptedSelectionUI,
)


def _button(**settings) -> tuple[ExportButton, RecordingSpreadsheetBuilder, InMemoryNotifier]:
    builder = RecordingSpreadsheetBuilder()
    notifier = InMemoryNotifier()
    return ExportButton(ExportConfiguration(**settings), builder, notifier), builder, notifier


class TestInitialState:
    def test_disabled_until_attached(self) -> None:
        button, _, _ = _button()
        assert button.visible is True
        assert button.enabled is False
        assert button.planner is None
        assert button.busy is False

    def test_tooltip(self) -> None:
        button, _, _ = _button()
        assert button.tooltip == "Download Excel"
        custom = ExportButton(
            ExportConfiguration(), RecordingSpreadsheetBuilder(), InMemoryNotifier(), tooltip="Export"
        )
        assert custom.tooltip == "Export"


class TestAttach:
    def test_enabled_with_visible_records(self) -> None:
        button, _, _ = _button()
        button.attach(InMemoryDataSource([{"id": 1}]))
        assert button.visible is True
        assert button.enabled is True
        assert button.planner is not None

    def test_disabled_without_visible_records(self) -> None:
        button, _, _ = _button()
        button.attach(InMemoryDataSource([{"id": 1}], visible_count=0))
        assert button.enabled is False

    def test_follows_content_changes(self) -> None:
        button, _, _ = _button()
        source = InMemoryDataSource()
        button.attach(source)
        assert button.enabled is False
        source.set_records([{"id": 1}])
        assert button.enabled is True
        source.set_records([])
        assert button.enabled is False

    def test_missing_source_hides_and_logs_once(self) -> None:
        button, _, _ = _button()
        with capture_logs() as logs:
            button.attach(None)
            button.attach(None)
        assert button.visible is False
        assert button.enabled is False
        misconfigured = [e for e in logs if e["event"] == "export_button.misconfigured"]
        assert len(misconfigured) == 1
        assert misconfigured[0]["log_level"] == "error"

    def test_dialog_without_ui_hides(self) -> None:
        button, _, _ = _button(show_selection_dialog=True)
        button.attach(InMemoryDataSource([{"id": 1}]))
        assert button.visible is False
        assert button.planner is None

    def test_dialog_with_ui(self) -> None:
        button = ExportButton(
            ExportConfiguration(show_selection_dialog=True),
            RecordingSpreadsheetBuilder(),
            InMemoryNotifier(),
            ScriptedSelectionUI(),
        )
        button.attach(InMemoryDataSource([{"id": 1}]))
        assert button.visible is True
        assert button.enabled is True

    def test_reattach_recovers_visibility(self) -> None:
        button, _, _ = _button()
        button.attach(None)
        button.attach(InMemoryDataSource([{"id": 1}]))
        assert button.visible is True
        assert button.enabled is True

    def test_refresh_failure_disables(self) -> None:
        button, _, _ = _button()
        source = InMemoryDataSource([{"id": 1}])
        button.attach(source)
        source.fail = RuntimeError("gone")
        button.refresh()
        assert button.enabled is False


class TestDetach:
    def test_unsubscribes(self) -> None:
        button, _, _ = _button()
        source = InMemoryDataSource([{"id": 1}])
        button.attach(source)
        assert source.listener_count == 1
        button.detach()
        assert source.listener_count == 0
        assert button.enabled is False
        source.set_records([{"id": 2}])
        assert button.enabled is False

    def test_reattach_does_not_leak_listeners(self) -> None:
        button, _, _ = _button()
        source = InMemoryDataSource([{"id": 1}])
        button.attach(source)
        button.attach(source)
        assert source.listener_count == 1


class TestPress:
    def test_press_exports(self) -> None:
        button, builder, notifier = _button()
        button.attach(InMemoryDataSource([{"id": 1}, {"id": 2}]))
        result = asyncio.run(button.press())
        assert result is not None
        assert builder.call_count == 1
        assert notifier.count("Excel export finished") == 1

    def test_press_ignored_when_disabled(self) -> None:
        button, builder, notifier = _button()
        button.attach(InMemoryDataSource([]))
        assert asyncio.run(button.press()) is None
        assert builder.call_count == 0
        assert notifier.messages == []

    def test_press_ignored_when_hidden(self) -> None:
        button, builder, _ = _button()
        button.attach(None)
        assert asyncio.run(button.press()) is None
        assert builder.call_count == 0
