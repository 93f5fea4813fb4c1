"""Application-layer errors: problems detected while setting up a run."""

from __future__ import annotations

from vercel_local_cron.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


__all__ = ["ApplicationError"]
