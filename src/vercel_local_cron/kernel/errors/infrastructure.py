"""Infrastructure errors: failures of the supervised dev server process."""

from __future__ import annotations

from typing import Any

from vercel_local_cron.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """I/O or process failure that is not a configuration problem."""

    default_code = "infrastructure_error"


class ProcessError(InfrastructureError):
    """The dev server could not be started or exited.

    ``exit_code`` is what the CLI should exit with: the server's own code,
    or 1 when the process never started.
    """

    default_code = "process_error"

    def __init__(
        self,
        command: str,
        message: str | None = None,
        *,
        exit_code: int = 1,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Process '{command}' failed", **kwargs)
        self.command = command
        self.exit_code = exit_code


__all__ = ["InfrastructureError", "ProcessError"]
