"""Application scheduler – Trigger: one job's cron loop."""
from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

from vercel_local_cron.adapters.http import Dispatcher
from vercel_local_cron.application.scheduler.evaluator import (
    CronEvaluator,
    CrontabEvaluator,
    EvaluatorFactory,
)
from vercel_local_cron.application.scheduler.job import JobDefinition, RuntimeContext
from vercel_local_cron.kernel.errors import ScheduleError
from vercel_local_cron.kernel.time import Clock, SystemClock
from vercel_local_cron.observability.logging import get_logger

__all__ = ["Trigger"]

logger = get_logger(__name__)

_TICK = timedelta(microseconds=1)


class Trigger:
    """Watches one job's schedule and fires a dispatch on every due instant.

    The loop sleeps until the next due instant, starts the dispatch as its
    own task and immediately computes the following instant, so a slow
    endpoint never delays or queues later fires. Instants that passed while
    the loop was not running are not replayed.
    """

    def __init__(
        self,
        job: JobDefinition,
        dispatcher: Dispatcher,
        context: RuntimeContext,
        *,
        clock: Clock | None = None,
        evaluator_factory: EvaluatorFactory | None = None,
    ) -> None:
        factory = evaluator_factory or CrontabEvaluator
        try:
            self._evaluator: CronEvaluator = factory(job.schedule)
        except (ValueError, TypeError) as exc:
            raise ScheduleError(job.path, job.schedule, str(exc), cause=exc) from exc
        self.job = job
        self._dispatcher = dispatcher
        self._context = context
        self._clock = clock or SystemClock()
        self._task: asyncio.Task[None] | None = None
        self._in_flight: set[asyncio.Task[None]] = set()
        self._last_due: datetime | None = None
        self._cancelled = False
        self.fire_count = 0

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def in_flight(self) -> int:
        """Dispatches started by this trigger that have not finished yet."""
        return len(self._in_flight)

    def next_due_instant(self) -> datetime | None:
        if self._cancelled:
            return None
        return self._next_due(self._clock.now())

    def start(self) -> None:
        """Begin watching the schedule. Requires a running event loop."""
        if self._cancelled or self._task is not None:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name=f"cron-trigger:{self.job.path}"
        )
        self._task.add_done_callback(self._on_loop_done)

    def cancel(self) -> None:
        """Stop all future fires. Dispatches already started keep running."""
        if self._cancelled:
            return
        self._cancelled = True
        self._evaluator.cancel()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _next_due(self, now: datetime) -> datetime | None:
        # Strictly after both "now" and the last instant already fired.
        base = now if self._last_due is None else max(now, self._last_due)
        return self._evaluator.next_due_instant(base + _TICK)

    async def _run(self) -> None:
        while not self._cancelled:
            due = self._next_due(self._clock.now())
            if due is None:
                logger.warning("cron.schedule_exhausted", path=self.job.path, schedule=self.job.schedule)
                return
            delay = (due - self._clock.now()).total_seconds()
            if delay > 0:
                await self._clock.sleep(delay)
            if self._cancelled:
                return
            self._last_due = due
            self._fire(due)

    def _fire(self, due: datetime) -> None:
        self.fire_count += 1
        task = asyncio.get_running_loop().create_task(
            self._dispatch(due), name=f"cron-dispatch:{self.job.path}"
        )
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _dispatch(self, due: datetime) -> None:
        try:
            await self._dispatcher.dispatch(self._context.port, self.job.path, self._context.secret)
        except Exception:  # noqa: BLE001
            logger.exception("cron.dispatch_crashed", path=self.job.path, due=due.isoformat())

    def _on_loop_done(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "cron.trigger_failed",
                path=self.job.path,
                schedule=self.job.schedule,
                error=repr(exc),
            )

    def __repr__(self) -> str:
        return f"Trigger(path={self.job.path!r}, schedule={self.job.schedule!r}, cancelled={self._cancelled})"
