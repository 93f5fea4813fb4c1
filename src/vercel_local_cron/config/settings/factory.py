"""Config settings – SettingsFactory."""
from __future__ import annotations

from typing import Any, Sequence, TypeVar

from vercel_local_cron.config.settings.base import Settings
from vercel_local_cron.config.settings.loaders import SettingsLoader, build_settings

T = TypeVar("T", bound=Settings)


class SettingsFactory:
    """Combine several sources into one settings instance.

    Sources are read in order and only the keys a source actually defines
    are merged, so a later dotenv file never resets a value to its default.
    ``overrides`` (typically CLI options) win over every source; ``None``
    entries in it mean "not given" and are dropped.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """
        Raises
        ------
        MissingRequiredSettingError
            A field without default is absent from every source.
        InvalidSettingValueError
            A source holds a value that cannot be coerced.
        ConfigurationError
            Any other construction failure (unknown override key, ``_validate``).
        """
        values: dict[str, Any] = {}
        for loader in loaders or ():
            values.update(loader.read(settings_cls))
        values.update({k: v for k, v in (overrides or {}).items() if v is not None})
        return build_settings(settings_cls, values)


__all__ = ["SettingsFactory"]
