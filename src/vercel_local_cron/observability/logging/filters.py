"""Observability – SensitiveFieldsFilter."""
from __future__ import annotations

from typing import Any

# Matched case-insensitively against log keys.
DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "authorization", "cron_secret", "secret", "token", "password", "api_key",
})


class SensitiveFieldsFilter:
    """Mask values logged under sensitive keys, e.g. the bearer header or ``CRON_SECRET``.

    Usable directly on a dict or as a structlog processor.
    """

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._fields = frozenset(name.lower() for name in sensitive_fields or DEFAULT_SENSITIVE_FIELDS)

    def _is_sensitive(self, key: Any) -> bool:
        return isinstance(key, str) and key.lower() in self._fields

    def redact_deep(self, data: dict[str, Any]) -> dict[str, Any]:
        return {k: self.REDACTED if self._is_sensitive(k) else self._scrub(v) for k, v in data.items()}

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.redact_deep(value)
        if isinstance(value, (list, tuple)):
            return type(value)(self._scrub(item) for item in value)
        return value

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        return self.redact_deep(event_dict)


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter"]
