"""Domain errors: problems with an individual job definition."""

from __future__ import annotations

from typing import Any

from vercel_local_cron.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a job definition cannot be honoured."""

    default_code = "domain_error"


class ScheduleError(DomainError):
    """A job's cron expression could not be turned into a schedule.

    Non-fatal: the scheduler skips the job and keeps the others running.
    """

    default_code = "invalid_schedule"

    def __init__(
        self,
        path: str,
        schedule: str,
        reason: str | None = None,
        **kwargs: Any,
    ) -> None:
        msg = f"Invalid schedule {schedule!r} for job {path}"
        if reason:
            msg = f"{msg}: {reason}"
        detail = {"path": path, "schedule": schedule}
        super().__init__(msg, detail=detail, **kwargs)
        self.path = path
        self.schedule = schedule
        self.reason = reason


__all__ = ["DomainError", "ScheduleError"]
