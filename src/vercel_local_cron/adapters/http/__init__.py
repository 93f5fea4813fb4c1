"""HTTP adapter – dispatch of cron calls to the local dev server."""
from vercel_local_cron.adapters.http.dispatcher import (
    DEFAULT_DISPATCH_TIMEOUT,
    Dispatcher,
    DispatchOutcome,
    DispatchResult,
    HttpDispatcher,
)

__all__ = [
    "DEFAULT_DISPATCH_TIMEOUT",
    "DispatchOutcome",
    "DispatchResult",
    "Dispatcher",
    "HttpDispatcher",
]
