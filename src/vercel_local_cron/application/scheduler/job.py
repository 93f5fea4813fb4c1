"""Application scheduler – JobDefinition and RuntimeContext dataclasses."""
from __future__ import annotations

from dataclasses import dataclass

__all__ = ["JobDefinition", "RuntimeContext"]


@dataclass(frozen=True)
class JobDefinition:
    """One entry of ``vercel.json``'s ``crons`` list."""

    path: str              # e.g. "/api/cron/cleanup"
    schedule: str          # e.g. "0 0 * * *"


@dataclass(frozen=True)
class RuntimeContext:
    """Where dispatches go: the dev server's port and the optional bearer secret."""

    port: int
    secret: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.port, bool) or not isinstance(self.port, int) or self.port <= 0:
            raise ValueError(f"port must be a positive integer, got {self.port!r}")
        if self.secret == "":
            object.__setattr__(self, "secret", None)
