"""Config validation – error types raised while loading configuration."""
from vercel_local_cron.config.validation.errors import (
    ConfigurationError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = ["ConfigurationError", "InvalidSettingValueError", "MissingRequiredSettingError"]
