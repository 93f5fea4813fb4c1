"""Config – job definitions, environment settings and their errors."""
from vercel_local_cron.config.jobs import DEFAULT_CONFIG_FILE, load_job_definitions, parse_job_definitions
from vercel_local_cron.config.settings import CronEnvironment, load_environment
from vercel_local_cron.config.validation import ConfigurationError

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "ConfigurationError",
    "CronEnvironment",
    "load_environment",
    "load_job_definitions",
    "parse_job_definitions",
]
