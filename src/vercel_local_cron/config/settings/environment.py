"""Config settings – the environment a cron session reads."""
from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Sequence

from vercel_local_cron.config.settings.base import Settings
from vercel_local_cron.config.settings.factory import SettingsFactory
from vercel_local_cron.config.settings.loaders import DotenvSettingsLoader
from vercel_local_cron.config.validation import InvalidSettingValueError

DEFAULT_PORT = 3000
DEFAULT_ENV_FILES = (".env.local",)


@dataclasses.dataclass
class CronEnvironment(Settings):
    """``CRON_SECRET`` and ``PORT``, as Vercel and Next.js name them."""

    cron_secret: str | None = None
    port: int | None = None

    def _validate(self) -> None:
        if self.port is not None and not 0 < self.port < 65536:
            raise InvalidSettingValueError("PORT", self.port, "must be between 1 and 65535")
        if self.cron_secret is not None and not self.cron_secret.isascii():
            # Never echo the secret.
            raise InvalidSettingValueError("CRON_SECRET", "[REDACTED]", "must contain only ASCII characters")

    def fallback_port(self, default: int = DEFAULT_PORT) -> int:
        return self.port if self.port is not None else default


def load_environment(
    env_files: Sequence[str | Path] = DEFAULT_ENV_FILES,
    cwd: str | Path | None = None,
) -> CronEnvironment:
    """Load dotenv files relative to *cwd* and read the cron environment."""
    base = Path(cwd) if cwd is not None else Path.cwd()
    files = [Path(f) if Path(f).is_absolute() else base / f for f in env_files]
    return SettingsFactory.create(CronEnvironment, loaders=[DotenvSettingsLoader(*files)])


__all__ = ["DEFAULT_ENV_FILES", "DEFAULT_PORT", "CronEnvironment", "load_environment"]
