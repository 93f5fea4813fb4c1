"""Application scheduler – CronScheduler owns the set of Triggers."""
from __future__ import annotations

import enum
from typing import Any, Sequence

from vercel_local_cron.adapters.http import Dispatcher, HttpDispatcher
from vercel_local_cron.application.scheduler.evaluator import EvaluatorFactory
from vercel_local_cron.application.scheduler.job import JobDefinition, RuntimeContext
from vercel_local_cron.application.scheduler.trigger import Trigger
from vercel_local_cron.kernel.errors import ScheduleError
from vercel_local_cron.kernel.time import Clock, SystemClock
from vercel_local_cron.observability.logging import get_logger

__all__ = ["CronScheduler", "SchedulerState"]

logger = get_logger(__name__)


class SchedulerState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    STOPPED = "stopped"


class CronScheduler:
    """Builds one :class:`Trigger` per job and starts / stops them together.

    A job whose schedule is invalid is logged and left out; it never prevents
    the other jobs from being scheduled. ``stop()`` may be called any number
    of times from any state and ``STOPPED`` is terminal.
    """

    def __init__(
        self,
        jobs: Sequence[JobDefinition],
        context: RuntimeContext,
        *,
        dispatcher: Dispatcher | None = None,
        clock: Clock | None = None,
        evaluator_factory: EvaluatorFactory | None = None,
    ) -> None:
        self._context = context
        self._dispatcher = dispatcher or HttpDispatcher()
        self._clock = clock or SystemClock()
        self._state = SchedulerState.UNINITIALIZED
        self._triggers: list[Trigger] = []
        self.skipped: list[ScheduleError] = []
        self._initialize_triggers(jobs, evaluator_factory)

    def _initialize_triggers(
        self,
        jobs: Sequence[JobDefinition],
        evaluator_factory: EvaluatorFactory | None,
    ) -> None:
        if not jobs:
            logger.warning("cron.no_jobs")
            return

        logger.info("cron.scheduling", jobs=len(jobs), port=self._context.port)
        for job in jobs:
            try:
                trigger = Trigger(
                    job,
                    self._dispatcher,
                    self._context,
                    clock=self._clock,
                    evaluator_factory=evaluator_factory,
                )
            except ScheduleError as exc:
                self.skipped.append(exc)
                logger.error(
                    "cron.job_skipped",
                    path=job.path,
                    schedule=job.schedule,
                    reason=exc.reason or exc.message,
                )
                continue

            self._triggers.append(trigger)
            next_run = trigger.next_due_instant()
            logger.info(
                "cron.job_scheduled",
                path=job.path,
                schedule=job.schedule,
                next_run=next_run.isoformat() if next_run else "never",
            )

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def context(self) -> RuntimeContext:
        return self._context

    @property
    def active_count(self) -> int:
        return len(self._triggers)

    @property
    def triggers(self) -> tuple[Trigger, ...]:
        return tuple(self._triggers)

    def start(self) -> None:
        """Start every trigger on the running event loop.

        Only an uninitialized scheduler with at least one trigger becomes
        active; otherwise this is a no-op.
        """
        if self._state is not SchedulerState.UNINITIALIZED or not self._triggers:
            return
        for trigger in self._triggers:
            trigger.start()
        self._state = SchedulerState.ACTIVE
        logger.info("cron.scheduler_started", active=len(self._triggers))

    def stop(self) -> int:
        """Cancel every trigger and return how many were stopped."""
        if self._state is SchedulerState.STOPPED:
            return 0
        stopped = len(self._triggers)
        for trigger in self._triggers:
            trigger.cancel()
        self._triggers.clear()
        self._state = SchedulerState.STOPPED
        logger.info("cron.scheduler_stopped", stopped=stopped)
        return stopped

    def describe(self) -> list[dict[str, Any]]:
        """Path, schedule and next run of each active trigger."""
        jobs = []
        for trigger in self._triggers:
            next_run = trigger.next_due_instant()
            jobs.append({
                "path": trigger.job.path,
                "schedule": trigger.job.schedule,
                "next_run": next_run.isoformat() if next_run else None,
            })
        return jobs
