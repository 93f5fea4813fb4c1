"""Application runner – one local cron session around a dev server.

Order of events::

    load env + vercel.json ──► spawn dev server ──► wait for port
        ──► build + start CronScheduler ──► wait for server exit or signal
        ──► LifecycleCoordinator stops the scheduler ──► exit code
"""
from __future__ import annotations

import asyncio
import signal
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Sequence

from vercel_local_cron.adapters.http import DEFAULT_DISPATCH_TIMEOUT, Dispatcher, HttpDispatcher
from vercel_local_cron.adapters.process import DEFAULT_DEV_COMMAND, DevServerProcess
from vercel_local_cron.application.lifecycle import LifecycleCoordinator
from vercel_local_cron.application.scheduler import (
    CronScheduler,
    CrontabEvaluator,
    JobDefinition,
    RuntimeContext,
)
from vercel_local_cron.config import (
    DEFAULT_CONFIG_FILE,
    ConfigurationError,
    CronEnvironment,
    load_environment,
    load_job_definitions,
)
from vercel_local_cron.config.settings import DEFAULT_ENV_FILES
from vercel_local_cron.kernel.errors import ProcessError
from vercel_local_cron.kernel.time import Clock, SystemClock
from vercel_local_cron.observability.logging import get_logger

__all__ = ["LocalCronRunner", "RunnerOptions", "preview_jobs"]

logger = get_logger(__name__)

ServerFactory = Callable[..., DevServerProcess]


@dataclass
class RunnerOptions:
    config_file: Path = Path(DEFAULT_CONFIG_FILE)
    env_files: tuple[str, ...] = DEFAULT_ENV_FILES
    command: str = DEFAULT_DEV_COMMAND
    cwd: Path | None = None
    port_timeout: float = 30.0
    dispatch_timeout: float = DEFAULT_DISPATCH_TIMEOUT
    shutdown_grace: float = 1.0

    @property
    def workdir(self) -> Path:
        return self.cwd or Path.cwd()

    @property
    def config_path(self) -> Path:
        if self.config_file.is_absolute():
            return self.config_file
        return self.workdir / self.config_file


def _exit_code(returncode: int) -> int:
    # Killed by a signal: report it the way a shell would.
    return 128 - returncode if returncode < 0 else returncode


def preview_jobs(jobs: Sequence[JobDefinition], now: datetime | None = None) -> list[dict[str, Any]]:
    """Next run of each job without starting anything; invalid schedules are flagged."""
    now = now or SystemClock().now()
    rows: list[dict[str, Any]] = []
    for job in jobs:
        try:
            next_run = CrontabEvaluator(job.schedule).next_due_instant(now)
        except ValueError as exc:
            rows.append({"path": job.path, "schedule": job.schedule, "next_run": None, "error": str(exc)})
            continue
        rows.append({
            "path": job.path,
            "schedule": job.schedule,
            "next_run": next_run.isoformat() if next_run else None,
            "error": None,
        })
    return rows


class LocalCronRunner:
    """Runs the dev server and the cron scheduler until one of them ends the session."""

    def __init__(
        self,
        options: RunnerOptions | None = None,
        *,
        server_factory: ServerFactory = DevServerProcess,
        dispatcher: Dispatcher | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.options = options or RunnerOptions()
        self._server_factory = server_factory
        self._dispatcher = dispatcher
        self._clock = clock
        self.scheduler: CronScheduler | None = None
        self.coordinator: LifecycleCoordinator | None = None

    async def run(self) -> int:
        opts = self.options
        try:
            environment = load_environment(opts.env_files, cwd=opts.workdir)
            jobs = load_job_definitions(opts.config_path)
        except ConfigurationError as exc:
            logger.error("cron.configuration_error", **exc.to_dict())
            return 1

        if not jobs:
            logger.warning("cron.nothing_to_schedule", config=str(opts.config_path))
            return 0

        server = self._server_factory(opts.command, cwd=opts.workdir)
        try:
            await server.start()
        except ProcessError as exc:
            logger.error("server.start_failed", command=exc.command, error=exc.message)
            return exc.exit_code

        stop_requested = asyncio.Event()
        coordinator = self.coordinator = LifecycleCoordinator(on_shutdown=lambda reason: stop_requested.set())
        coordinator.install()
        server_exit = asyncio.create_task(server.wait())
        stop_wait = asyncio.create_task(stop_requested.wait())
        try:
            port = await self._await_port(server, server_exit, stop_wait, environment)
            if port is not None:
                self.scheduler = self._build_scheduler(jobs, RuntimeContext(port, environment.cron_secret))
                coordinator.attach(self.scheduler)
                if self.scheduler.active_count == 0:
                    logger.warning("cron.no_valid_jobs", skipped=len(self.scheduler.skipped))
                self.scheduler.start()

            await asyncio.wait({server_exit, stop_wait}, return_when=asyncio.FIRST_COMPLETED)
            if server_exit.done():
                coordinator.shutdown("server_exit")
                return _exit_code(server_exit.result())

            server.terminate(signal.SIGINT)
            try:
                await asyncio.wait_for(asyncio.shield(server_exit), timeout=opts.shutdown_grace)
            except asyncio.TimeoutError:
                logger.warning("server.terminate_timeout", grace_seconds=opts.shutdown_grace)
                server.terminate(signal.SIGTERM)
            return 0
        finally:
            stop_wait.cancel()
            coordinator.stop_scheduler()
            coordinator.uninstall()

    async def _await_port(
        self,
        server: DevServerProcess,
        server_exit: asyncio.Task[int],
        stop_wait: asyncio.Task[Any],
        environment: CronEnvironment,
    ) -> int | None:
        detected = asyncio.create_task(server.detector.wait())
        try:
            await asyncio.wait(
                {detected, server_exit, stop_wait},
                timeout=self.options.port_timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            if not detected.done():
                detected.cancel()

        if server.detector.detected:
            return server.detector.port
        if server_exit.done() or stop_wait.done():
            return None
        port = environment.fallback_port()
        logger.warning(
            "server.port_not_detected",
            waited_seconds=self.options.port_timeout,
            fallback_port=port,
        )
        return port

    def _build_scheduler(self, jobs: Sequence[JobDefinition], context: RuntimeContext) -> CronScheduler:
        dispatcher = self._dispatcher or HttpDispatcher(timeout=self.options.dispatch_timeout)
        return CronScheduler(jobs, context, dispatcher=dispatcher, clock=self._clock)
