"""Testing helpers for code that drives the cron engine."""
from vercel_local_cron.testing.fakes import DispatchCall, RecordingDispatcher, SimulatedClock

__all__ = ["DispatchCall", "RecordingDispatcher", "SimulatedClock"]
