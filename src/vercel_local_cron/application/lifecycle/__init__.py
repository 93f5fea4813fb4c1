"""Application lifecycle – signal and exit handling for a cron session."""
from vercel_local_cron.application.lifecycle.coordinator import (
    DEFAULT_SIGNALS,
    LifecycleCoordinator,
    ShutdownHook,
    Stoppable,
)

__all__ = ["DEFAULT_SIGNALS", "LifecycleCoordinator", "ShutdownHook", "Stoppable"]
