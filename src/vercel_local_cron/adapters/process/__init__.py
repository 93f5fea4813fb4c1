"""Process adapter – dev server supervision and port detection."""
from vercel_local_cron.adapters.process.port_detector import PortDetector, detect_port
from vercel_local_cron.adapters.process.server import DEFAULT_DEV_COMMAND, DevServerProcess

__all__ = ["DEFAULT_DEV_COMMAND", "DevServerProcess", "PortDetector", "detect_port"]
