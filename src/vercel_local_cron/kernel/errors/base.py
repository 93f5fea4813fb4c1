"""Root error class for the vercel-local-cron error hierarchy."""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Every error this tool raises on purpose.

    ``code`` is a stable slug for log filtering, ``detail`` carries the
    job path, setting name or command the error is about. Chaining through
    ``cause`` keeps the original traceback in ``logger.exception`` output.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.detail = dict(detail) if detail else {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Flat key-values for ``logger.error(event, **err.to_dict())``."""
        fields: dict[str, Any] = {"code": self.code, "message": self.message, "detail": self.detail}
        if self.cause is not None:
            fields["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return fields

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


__all__ = ["BaseError"]
