"""Unit tests – Settings, loaders and SettingsFactory."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

import pytest
from structlog.testing import capture_logs

from sheet_export.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from sheet_export.config.validation import (
    ConfigurationError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)


# ---------------------------------------------------------------------------
# Shared settings fixture
# ---------------------------------------------------------------------------


@dataclass
class ServiceSettings(Settings):
    _prefix: ClassVar[str] = "SVC"
    host: str = "localhost"
    port: int = 8080
    ratio: float = 0.5
    debug: bool = False
    tags: list[str] = field(default_factory=list)

    def _validate(self) -> None:
        if self.port <= 0:
            raise InvalidSettingValueError("port", self.port, "must be positive")


@dataclass
class StrictSettings(Settings):
    _prefix: ClassVar[str] = "STRICT"
    token: str


class _BrokenLoader(SettingsLoader):
    def load(self, settings_class):
        raise RuntimeError("vault sealed")


class _FixedLoader(SettingsLoader):
    def __init__(self, **values) -> None:
        self._values = values

    def load(self, settings_class):
        return settings_class(**self._values)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("SVC_HOST", "SVC_PORT", "SVC_RATIO", "SVC_DEBUG", "SVC_TAGS", "STRICT_TOKEN"):
        monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# EnvSettingsLoader
# ---------------------------------------------------------------------------


class TestEnvSettingsLoader:
    def test_defaults_when_unset(self) -> None:
        s = EnvSettingsLoader().load(ServiceSettings)
        assert s == ServiceSettings()

    def test_coercion(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SVC_HOST", "db.internal")
        monkeypatch.setenv("SVC_PORT", "5432")
        monkeypatch.setenv("SVC_RATIO", "0.25")
        monkeypatch.setenv("SVC_DEBUG", "Yes")
        monkeypatch.setenv("SVC_TAGS", "a, b,,c")
        s = EnvSettingsLoader().load(ServiceSettings)
        assert s.host == "db.internal"
        assert s.port == 5432
        assert s.ratio == 0.25
        assert s.debug is True
        assert s.tags == ["a", "b", "c"]

    @pytest.mark.parametrize("raw", ["0", "false", "off", "nope"])
    def test_falsy_booleans(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("SVC_DEBUG", raw)
        assert EnvSettingsLoader().load(ServiceSettings).debug is False

    def test_missing_required(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            EnvSettingsLoader().load(StrictSettings)
        assert exc_info.value.setting_name == "STRICT_TOKEN"

    def test_invalid_value_propagates(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SVC_PORT", "-1")
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader().load(ServiceSettings)

    def test_unparseable_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SVC_PORT", "eighty")
        with pytest.raises(ValueError):
            EnvSettingsLoader().load(ServiceSettings)


# ---------------------------------------------------------------------------
# DotenvSettingsLoader
# ---------------------------------------------------------------------------


class TestDotenvSettingsLoader:
    def test_reads_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("SVC_HOST=from-file\nSVC_PORT=9000\n")
        monkeypatch.setenv("SVC_HOST", "from-env")
        monkeypatch.setenv("SVC_PORT", "1")
        s = DotenvSettingsLoader(str(env_file), override=True).load(ServiceSettings)
        assert s.host == "from-file"
        assert s.port == 9000

    def test_environment_wins_without_override(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("SVC_HOST=from-file\n")
        monkeypatch.setenv("SVC_HOST", "from-env")
        s = DotenvSettingsLoader(str(env_file)).load(ServiceSettings)
        assert s.host == "from-env"

    def test_missing_file_falls_back_to_environment(self, tmp_path) -> None:
        s = DotenvSettingsLoader(str(tmp_path / "absent.env")).load(ServiceSettings)
        assert s.host == "localhost"


# ---------------------------------------------------------------------------
# SettingsFactory
# ---------------------------------------------------------------------------


class TestSettingsFactory:
    def test_no_loaders_uses_defaults(self) -> None:
        assert SettingsFactory.create(ServiceSettings) == ServiceSettings()

    def test_later_loader_wins(self) -> None:
        s = SettingsFactory.create(
            ServiceSettings,
            loaders=[_FixedLoader(host="a", port=1), _FixedLoader(host="b")],
        )
        assert s.host == "b"
        assert s.port == 1

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SVC_HOST", "env-host")
        s = SettingsFactory.create(
            ServiceSettings, loaders=[EnvSettingsLoader()], overrides={"host": "override"}
        )
        assert s.host == "override"

    def test_failing_loader_is_skipped_and_logged(self) -> None:
        with capture_logs() as logs:
            s = SettingsFactory.create(
                ServiceSettings, loaders=[_BrokenLoader(), _FixedLoader(port=9)]
            )
        assert s.port == 9
        skipped = [e for e in logs if e["event"] == "settings.loader_skipped"]
        assert skipped[0]["loader"] == "_BrokenLoader"
        assert skipped[0]["error"] == "vault sealed"

    def test_missing_required_after_merge(self) -> None:
        with pytest.raises(MissingRequiredSettingError):
            SettingsFactory.create(StrictSettings, loaders=[EnvSettingsLoader()])

    def test_required_supplied_by_override(self) -> None:
        assert SettingsFactory.create(StrictSettings, overrides={"token": "t"}).token == "t"

    def test_invalid_override(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            SettingsFactory.create(ServiceSettings, overrides={"port": 0})

    def test_unknown_override_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            SettingsFactory.create(ServiceSettings, overrides={"colour": "blue"})
        assert isinstance(exc_info.value.cause, TypeError)
