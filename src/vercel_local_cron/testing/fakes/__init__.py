"""Testing fakes – simulated time and a recording dispatcher."""
from vercel_local_cron.testing.fakes.clock import SimulatedClock
from vercel_local_cron.testing.fakes.dispatcher import DispatchCall, RecordingDispatcher

__all__ = ["DispatchCall", "RecordingDispatcher", "SimulatedClock"]
