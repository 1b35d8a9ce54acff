"""Application-layer errors – refusals raised during a single export attempt."""

from __future__ import annotations

from typing import Any

from sheet_export.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Use-case level failure; recoverable by the user."""

    default_code = "application_error"


class ConfigurationError(ApplicationError):
    """Required linkage (data source, settings) is missing or unresolvable."""

    default_code = "configuration_error"


class EmptyDataError(ApplicationError):
    """An export was attempted with nothing to export."""

    default_code = "empty_data"

    def __init__(self, message: str = "No data to export", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class NoSelectionError(ApplicationError):
    """The selection dialog was confirmed with no columns chosen."""

    default_code = "no_selection"

    def __init__(
        self,
        message: str = "Select at least one property to continue.",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "EmptyDataError",
    "NoSelectionError",
]
