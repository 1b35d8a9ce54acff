"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError                   (domain.py)
    │   └── ValidationError
    ├── ApplicationError              (application.py)
    │   ├── ConfigurationError
    │   ├── EmptyDataError
    │   └── NoSelectionError
    └── InfrastructureError           (infrastructure.py)
        ├── DataSourceUnavailableError
        └── ExportBuildError
"""

from sheet_export.kernel.errors.application import (
    ApplicationError,
    ConfigurationError,
    EmptyDataError,
    NoSelectionError,
)
from sheet_export.kernel.errors.base import BaseError
from sheet_export.kernel.errors.domain import DomainError, ValidationError
from sheet_export.kernel.errors.infrastructure import (
    DataSourceUnavailableError,
    ExportBuildError,
    InfrastructureError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConfigurationError",
    "DataSourceUnavailableError",
    "DomainError",
    "EmptyDataError",
    "ExportBuildError",
    "InfrastructureError",
    "NoSelectionError",
    "ValidationError",
]
