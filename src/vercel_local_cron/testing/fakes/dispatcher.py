"""Testing fakes – RecordingDispatcher."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass

from vercel_local_cron.adapters.http import DispatchOutcome, DispatchResult

__all__ = ["DispatchCall", "RecordingDispatcher"]


@dataclass(frozen=True)
class DispatchCall:
    port: int
    path: str
    secret: str | None


class RecordingDispatcher:
    """Records each call and answers with a canned outcome.

    ``block`` keeps every dispatch pending until ``release()`` is called,
    which is how tests model a slow endpoint.
    """

    def __init__(
        self,
        outcome: DispatchOutcome = DispatchOutcome.SUCCESS,
        status_code: int | None = 200,
        *,
        block: bool = False,
    ) -> None:
        self.calls: list[DispatchCall] = []
        self.completed: list[DispatchResult] = []
        self._outcome = outcome
        self._status_code = status_code
        self._gate = asyncio.Event()
        if not block:
            self._gate.set()

    def release(self) -> None:
        self._gate.set()

    async def dispatch(self, port: int, path: str, secret: str | None = None) -> DispatchResult:
        self.calls.append(DispatchCall(port=port, path=path, secret=secret))
        await self._gate.wait()
        result = DispatchResult(
            path=path,
            outcome=self._outcome,
            duration_ms=0.0,
            status_code=self._status_code,
        )
        self.completed.append(result)
        return result
