"""Config settings – EnvSettingsLoader, DotenvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from pathlib import Path
from typing import Any, TypeVar

from dotenv import load_dotenv

from vercel_local_cron.config.settings.base import Settings
from vercel_local_cron.config.validation import (
    ConfigurationError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off", "")


def build_settings(settings_class: type[T], values: dict[str, Any]) -> T:
    """Instantiate *settings_class* from field values, mapping failures to config errors."""
    missing = [
        f.name
        for f in dataclasses.fields(settings_class)  # type: ignore[arg-type]
        if f.name not in values
        and f.default is dataclasses.MISSING
        and f.default_factory is dataclasses.MISSING  # type: ignore[misc]
    ]
    if missing:
        raise MissingRequiredSettingError(settings_class.env_key(missing[0]))
    try:
        return settings_class(**values)
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(f"Invalid {settings_class.__name__}: {exc}", cause=exc) from exc


def _base_type(type_hint: Any) -> str:
    """Reduce ``int | None`` / ``Optional[int]`` to ``"int"``."""
    name = type_hint if isinstance(type_hint, str) else getattr(type_hint, "__name__", str(type_hint))
    name = name.replace("Optional[", "").rstrip("]")
    parts = [p.strip() for p in name.split("|") if p.strip() != "None"]
    return parts[0] if parts else name


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def read(self, settings_class: type[Settings]) -> dict[str, Any]:
        """Return the coerced values this source defines, keyed by field name."""

    def load(self, settings_class: type[T]) -> T:
        return build_settings(settings_class, self.read(settings_class))


class EnvSettingsLoader(SettingsLoader):
    """Load settings from OS environment variables.

    Empty strings count as unset so that ``CRON_SECRET=`` in an env file
    does not produce an empty bearer token.
    """

    def read(self, settings_class: type[Settings]) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = settings_class.env_key(field.name)
            raw = os.environ.get(env_key)
            if raw is None or raw.strip() == "":
                continue
            values[field.name] = self._coerce(env_key, raw.strip(), field.type)
        return values

    def _coerce(self, env_key: str, value: str, type_hint: Any) -> Any:
        base = _base_type(type_hint)
        if base == "bool":
            lowered = value.lower()
            if lowered in _TRUTHY:
                return True
            if lowered in _FALSY:
                return False
            raise InvalidSettingValueError(env_key, value, "expected a boolean")
        if base == "int":
            try:
                return int(value)
            except ValueError:
                raise InvalidSettingValueError(env_key, value, "expected an integer") from None
        if base == "float":
            try:
                return float(value)
            except ValueError:
                raise InvalidSettingValueError(env_key, value, "expected a number") from None
        if base.startswith("list"):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


class DotenvSettingsLoader(EnvSettingsLoader):
    """Load one or more dotenv files into ``os.environ``, then read it.

    Files are applied in order; a missing file is skipped. Variables already
    present in the process environment win unless ``override`` is set.
    """

    def __init__(self, *env_files: str | Path, override: bool = False) -> None:
        self._env_files = env_files or (".env",)
        self._override = override

    def read(self, settings_class: type[Settings]) -> dict[str, Any]:
        for env_file in self._env_files:
            if Path(env_file).is_file():
                load_dotenv(env_file, override=self._override)
        return super().read(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader", "build_settings"]
