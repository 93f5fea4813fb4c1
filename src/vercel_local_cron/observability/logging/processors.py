"""Observability – get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Module logger, optionally pre-bound (``get_logger(__name__, path=job.path)``).

    Safe to call at import time: the returned proxy picks up whatever
    ``configure_logging`` or ``structlog.testing.capture_logs`` set later.
    """
    logger = structlog.get_logger(name)
    return logger.bind(**initial_values) if initial_values else logger


__all__ = ["get_logger"]
