"""Infrastructure errors – failures of external collaborators."""

from __future__ import annotations

from typing import Any

from sheet_export.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """A collaborator outside the planner failed."""

    default_code = "infrastructure_error"


class DataSourceUnavailableError(InfrastructureError):
    """The bound data source could not be read."""

    default_code = "data_source_unavailable"

    def __init__(
        self,
        message: str = "Data source is unavailable",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)


class ExportBuildError(InfrastructureError):
    """The spreadsheet builder failed to produce or store the file."""

    default_code = "export_build_failed"

    def __init__(
        self,
        message: str,
        *,
        file_name: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.file_name = file_name


__all__ = [
    "DataSourceUnavailableError",
    "ExportBuildError",
    "InfrastructureError",
]
