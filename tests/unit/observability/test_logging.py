"""Unit tests for observability logging."""

from __future__ import annotations

import json
import logging

import pytest
import structlog
from structlog.testing import capture_logs

from sheet_export.observability.logging import (
    Logger,
    configure_logging,
    export_run_context,
    get_logger,
    new_run_id,
)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestGetLogger:
    def test_emits_events(self) -> None:
        with capture_logs() as logs:
            get_logger("tests").info("export.started", rows=3)
        assert logs == [{"event": "export.started", "rows": 3, "log_level": "info"}]

    def test_initial_values_bound(self) -> None:
        with capture_logs() as logs:
            get_logger("tests", component="button").warning("export_button.refresh_failed")
        assert logs[0]["component"] == "button"

    def test_protocol_methods(self) -> None:
        with capture_logs() as logs:
            log: Logger = get_logger("tests", component="planner")
            log.debug("a")
            log.info("b")
            log.warning("c")
            log.error("d")
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                log.exception("e")
        assert [(e["event"], e["log_level"]) for e in logs] == [
            ("a", "debug"),
            ("b", "info"),
            ("c", "warning"),
            ("d", "error"),
            ("e", "error"),
        ]
        assert {e["component"] for e in logs} == {"planner"}


class TestRunContext:
    def test_new_run_id(self) -> None:
        run_id = new_run_id()
        assert len(run_id) == 12
        assert run_id != new_run_id()

    def test_binds_and_unbinds(self) -> None:
        with export_run_context("abc123", source="orders") as run_id:
            assert run_id == "abc123"
            assert structlog.contextvars.get_contextvars() == {
                "run_id": "abc123",
                "source": "orders",
            }
        assert "run_id" not in structlog.contextvars.get_contextvars()


class TestConfigureLogging:
    def test_json_output_carries_run_id(self, restore_logging, capsys) -> None:
        configure_logging(logging.INFO)
        with export_run_context("run-1"):
            structlog.get_logger("tests.configured").info("export.finished", size_bytes=10)
        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "export.finished"
        assert payload["run_id"] == "run-1"
        assert payload["level"] == "info"
        assert payload["logger"] == "tests.configured"

    def test_level_filters(self, restore_logging, capsys) -> None:
        configure_logging(logging.WARNING)
        structlog.get_logger("tests.filtered").info("export.started")
        assert capsys.readouterr().err == ""
