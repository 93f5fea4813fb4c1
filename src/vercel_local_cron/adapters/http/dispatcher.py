"""HTTP adapter – HttpDispatcher calls a cron route on the local dev server."""
from __future__ import annotations

import asyncio
import enum
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Protocol, runtime_checkable

import httpx

from vercel_local_cron.observability.logging import get_logger

__all__ = [
    "DEFAULT_DISPATCH_TIMEOUT",
    "DispatchOutcome",
    "DispatchResult",
    "Dispatcher",
    "HttpDispatcher",
]

DEFAULT_DISPATCH_TIMEOUT = 30.0

logger = get_logger(__name__)


class DispatchOutcome(str, enum.Enum):
    SUCCESS = "success"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class DispatchResult:
    """What happened to one dispatch attempt. Only ever logged."""

    path: str
    outcome: DispatchOutcome
    duration_ms: float
    status_code: int | None = None
    error: str | None = None
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def success(self) -> bool:
        return self.outcome is DispatchOutcome.SUCCESS


@runtime_checkable
class Dispatcher(Protocol):
    """Port: perform one call against the dev server and report the outcome.

    Implementations must never raise for request failures.
    """

    async def dispatch(self, port: int, path: str, secret: str | None = None) -> DispatchResult: ...


class HttpDispatcher:
    """GET ``http://<host>:<port><path>`` with an overall deadline.

    A fresh ``httpx.AsyncClient`` is opened per call so that nothing is shared
    between dispatches; the client is closed on every exit path, including
    when the deadline cancels the request.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_DISPATCH_TIMEOUT,
        host: str = "localhost",
        **client_kwargs: Any,
    ) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self._timeout = timeout
        self._host = host
        self._client_kwargs = client_kwargs

    @property
    def timeout(self) -> float:
        return self._timeout

    def url_for(self, port: int, path: str) -> str:
        return f"http://{self._host}:{port}{path}"

    async def dispatch(self, port: int, path: str, secret: str | None = None) -> DispatchResult:
        headers: dict[str, str] = {}
        if secret:
            headers["Authorization"] = f"Bearer {secret}"

        started_at = datetime.now(UTC)
        t0 = time.monotonic()
        status_code: int | None = None
        error: str | None = None
        try:
            response = await asyncio.wait_for(
                self._get(self.url_for(port, path), headers),
                timeout=self._timeout,
            )
            status_code = response.status_code
            outcome = (
                DispatchOutcome.SUCCESS
                if response.is_success
                else DispatchOutcome.HTTP_ERROR
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            outcome = DispatchOutcome.TIMEOUT
            error = f"Request timeout ({self._timeout:g}s)"
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            outcome = DispatchOutcome.NETWORK_ERROR
            error = str(exc) or type(exc).__name__
        except UnicodeEncodeError:
            # httpx only sends ASCII header values.
            outcome = DispatchOutcome.NETWORK_ERROR
            error = "Request not sent: secret is not ASCII"

        result = DispatchResult(
            path=path,
            outcome=outcome,
            duration_ms=round((time.monotonic() - t0) * 1000, 1),
            status_code=status_code,
            error=error,
            started_at=started_at,
        )
        self._log(result)
        return result

    async def _get(self, url: str, headers: dict[str, str]) -> httpx.Response:
        # httpx's own timeout bounds each phase; wait_for above bounds the total.
        async with httpx.AsyncClient(timeout=self._timeout, **self._client_kwargs) as client:
            return await client.get(url, headers=headers)

    @staticmethod
    def _log(result: DispatchResult) -> None:
        fields = {
            "path": result.path,
            "outcome": result.outcome.value,
            "status_code": result.status_code,
            "duration_ms": result.duration_ms,
            "started_at": result.started_at.isoformat(),
        }
        if result.success:
            logger.info("cron.dispatch", **fields)
        else:
            logger.error("cron.dispatch", error=result.error, **fields)
