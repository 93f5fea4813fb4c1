"""
vercel_local_cron – run Vercel cron jobs against a local dev server.

Import path convention::

    from vercel_local_cron.application.scheduler import CronScheduler, JobDefinition, RuntimeContext
    from vercel_local_cron.adapters.http import HttpDispatcher
    from vercel_local_cron.config import load_job_definitions
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
