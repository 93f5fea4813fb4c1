"""Kernel time – Clock port + implementations."""
from vercel_local_cron.kernel.time.clock import Clock, SystemClock

__all__ = ["Clock", "SystemClock"]
