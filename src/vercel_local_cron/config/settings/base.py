"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import ClassVar


@dataclasses.dataclass
class Settings:
    """Dataclass read from environment variables.

    Field ``port`` of a subclass with ``_prefix = "APP"`` comes from
    ``APP_PORT``; with the default empty prefix it comes from ``PORT``, which
    is how Vercel and Next.js name ``CRON_SECRET`` and ``PORT``.
    """

    _prefix: ClassVar[str] = ""

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return "_".join(p for p in (cls._prefix, field_name) if p).upper()

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Hook for range and cross-field checks; raise InvalidSettingValueError."""


__all__ = ["Settings"]
