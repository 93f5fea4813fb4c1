"""Config settings – 12-factor env-based configuration."""
from vercel_local_cron.config.settings.base import Settings
from vercel_local_cron.config.settings.environment import (
    DEFAULT_ENV_FILES,
    DEFAULT_PORT,
    CronEnvironment,
    load_environment,
)
from vercel_local_cron.config.settings.factory import SettingsFactory
from vercel_local_cron.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "DEFAULT_ENV_FILES",
    "DEFAULT_PORT",
    "CronEnvironment",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "load_environment",
]
