"""Config settings – 12-factor env-based configuration."""
from taskmanager.config.settings.base import AppSettings, Settings
from taskmanager.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["AppSettings", "EnvSettingsLoader", "Settings", "SettingsLoader"]
