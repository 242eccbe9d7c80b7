"""Config – environment-driven application settings."""
from taskmanager.config.settings import AppSettings, EnvSettingsLoader, Settings, SettingsLoader
from taskmanager.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "AppSettings",
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
