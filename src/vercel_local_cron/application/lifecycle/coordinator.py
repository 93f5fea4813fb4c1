"""Application lifecycle – stop the scheduler exactly once on the way out."""
from __future__ import annotations

import asyncio
import atexit
import signal
from typing import Callable, Protocol, Sequence

from vercel_local_cron.observability.logging import get_logger

__all__ = ["DEFAULT_SIGNALS", "LifecycleCoordinator", "ShutdownHook", "Stoppable"]

logger = get_logger(__name__)

DEFAULT_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)

ShutdownHook = Callable[[str], None]


class Stoppable(Protocol):
    def stop(self) -> int: ...


class LifecycleCoordinator:
    """Owns process-level shutdown for one cron session.

    The component that builds the scheduler passes a single ``on_shutdown``
    hook here; the coordinator is the only place that listens for signals.
    It may be triggered before any scheduler exists (the dev server never
    became ready), in which case only the hook runs.
    """

    def __init__(
        self,
        on_shutdown: ShutdownHook | None = None,
        *,
        signals: Sequence[signal.Signals] = DEFAULT_SIGNALS,
    ) -> None:
        self._on_shutdown = on_shutdown
        self._signals = tuple(signals)
        self._scheduler: Stoppable | None = None
        self._scheduler_stopped = False
        self._shutdown_reason: str | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._installed: list[signal.Signals] = []
        self._fallback_installed: dict[signal.Signals, object] = {}
        self._atexit_registered = False

    @property
    def scheduler(self) -> Stoppable | None:
        return self._scheduler

    @property
    def shutting_down(self) -> bool:
        return self._shutdown_reason is not None

    @property
    def shutdown_reason(self) -> str | None:
        return self._shutdown_reason

    def attach(self, scheduler: Stoppable) -> None:
        """Hand over the scheduler once it has been built.

        A scheduler attached after shutdown began is stopped right away.
        """
        self._scheduler = scheduler
        self._scheduler_stopped = False
        if self.shutting_down:
            self.stop_scheduler()

    def install(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Register signal handlers on *loop* and a best-effort ``atexit`` stop."""
        self._loop = loop or asyncio.get_running_loop()
        for sig in self._signals:
            try:
                self._loop.add_signal_handler(sig, self.shutdown, sig.name)
                self._installed.append(sig)
            except NotImplementedError:
                # Event loops without add_signal_handler (Windows).
                self._fallback_installed[sig] = signal.signal(sig, self._handle_signal)
        if not self._atexit_registered:
            atexit.register(self.stop_scheduler)
            self._atexit_registered = True

    def uninstall(self) -> None:
        if self._loop is not None:
            for sig in self._installed:
                self._loop.remove_signal_handler(sig)
        for sig, previous in self._fallback_installed.items():
            signal.signal(sig, previous)  # type: ignore[arg-type]
        self._installed.clear()
        self._fallback_installed.clear()
        if self._atexit_registered:
            atexit.unregister(self.stop_scheduler)
            self._atexit_registered = False

    def _handle_signal(self, signum: int, frame: object) -> None:  # noqa: ARG002
        name = signal.Signals(signum).name
        if self._loop is not None and self._loop.is_running():
            self._loop.call_soon_threadsafe(self.shutdown, name)
        else:
            self.shutdown(name)

    def stop_scheduler(self) -> None:
        """Stop the attached scheduler at most once; no scheduler is a no-op."""
        if self._scheduler is None or self._scheduler_stopped:
            return
        self._scheduler_stopped = True
        self._scheduler.stop()

    def shutdown(self, reason: str = "shutdown") -> None:
        """Stop the scheduler, then run the shutdown hook. Repeats are ignored."""
        if self.shutting_down:
            logger.debug("lifecycle.shutdown_repeated", reason=reason, first_reason=self._shutdown_reason)
            return
        self._shutdown_reason = reason
        logger.info("lifecycle.shutdown", reason=reason, scheduler=self._scheduler is not None)
        self.stop_scheduler()
        if self._on_shutdown is not None:
            self._on_shutdown(reason)
