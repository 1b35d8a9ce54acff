"""Config settings – env-based and declared configuration."""
from sheet_export.config.settings.base import Settings
from sheet_export.config.settings.factory import SettingsFactory
from sheet_export.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
