"""Config validation errors."""
from sheet_export.config.validation.errors import (
    ConfigurationError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = ["ConfigurationError", "InvalidSettingValueError", "MissingRequiredSettingError"]
