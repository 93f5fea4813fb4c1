"""Observability – configure_logging."""
from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

from vercel_local_cron.observability.logging.filters import SensitiveFieldsFilter


def configure_logging(
    level: int | str = logging.INFO,
    *,
    json_logs: bool = False,
    sensitive_fields: frozenset[str] | None = None,
    stream: TextIO | None = None,
) -> None:
    """Route structlog through a stdlib handler with JSON or console output.

    Loggers are not cached on first use, so ``structlog.testing.capture_logs``
    keeps working after this has been called.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    shared_processors: list[Any] = [
        SensitiveFieldsFilter(sensitive_fields),
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    renderer: Any
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=(stream or sys.stderr).isatty())
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    # httpx logs every request at INFO; the dispatcher already reports them.
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


__all__ = ["configure_logging"]
