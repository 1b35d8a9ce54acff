"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from sheet_export.config.settings.base import Settings
from sheet_export.config.settings.loaders import SettingsLoader
from sheet_export.config.validation.errors import (
    ConfigurationError,
    MissingRequiredSettingError,
)
from sheet_export.observability.logging import get_logger

T = TypeVar("T", bound=Settings)

logger = get_logger(__name__)


class SettingsFactory:
    """Merge outputs from multiple loaders, apply overrides, and construct
    a settings dataclass in one step.

    Loaders are applied in order; later loaders override earlier ones for
    fields they actually set.  *overrides* take the highest priority.
    A loader that fails is logged and skipped so that the remaining loaders
    may still contribute values.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """
        Parameters
        ----------
        settings_cls:
            The :class:`~sheet_export.config.settings.base.Settings` subclass
            to construct.
        loaders:
            Ordered sequence of loaders.  Later loaders win on field conflicts.
        overrides:
            Explicit key-value pairs applied after all loaders, useful for
            declared settings coming from code and for tests.

        Raises
        ------
        MissingRequiredSettingError
            When a required field (no default) is absent after all sources
            have been merged.
        ConfigurationError
            On any other construction failure, including invalid values.
        """
        merged: dict[str, Any] = {}

        for loader in loaders or []:
            try:
                instance = loader.load(settings_cls)
            except Exception as exc:  # noqa: BLE001 – skip failing loaders
                logger.warning(
                    "settings.loader_skipped",
                    loader=type(loader).__name__,
                    error=str(exc),
                )
                continue
            defaults = _defaults_of(settings_cls)
            for field in dataclasses.fields(instance):  # type: ignore[arg-type]
                value = getattr(instance, field.name)
                if field.name in defaults and defaults[field.name] == value:
                    continue
                merged[field.name] = value

        if overrides:
            merged.update(overrides)

        for field in dataclasses.fields(settings_cls):  # type: ignore[arg-type]
            if field.name in merged:
                continue
            if (
                field.default is dataclasses.MISSING
                and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
            ):
                raise MissingRequiredSettingError(field.name)

        try:
            return settings_cls(**merged)
        except ConfigurationError:
            raise
        except Exception as exc:
            raise ConfigurationError(
                f"Failed to construct {settings_cls.__name__}: {exc}", cause=exc
            ) from exc


def _defaults_of(settings_cls: type[Settings]) -> dict[str, Any]:
    defaults: dict[str, Any] = {}
    for field in dataclasses.fields(settings_cls):  # type: ignore[arg-type]
        if field.default is not dataclasses.MISSING:
            defaults[field.name] = field.default
        elif field.default_factory is not dataclasses.MISSING:  # type: ignore[misc]
            defaults[field.name] = field.default_factory()  # type: ignore[misc]
    return defaults


__all__ = ["SettingsFactory"]
