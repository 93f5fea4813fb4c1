"""Observability – structured logging helpers."""
from vercel_local_cron.observability.logging.factory import configure_logging
from vercel_local_cron.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from vercel_local_cron.observability.logging.processors import get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "SensitiveFieldsFilter",
    "configure_logging",
    "get_logger",
]
