"""Application scheduler – cron triggers and the scheduler that owns them."""
from vercel_local_cron.application.scheduler.evaluator import CronEvaluator, CrontabEvaluator, EvaluatorFactory
from vercel_local_cron.application.scheduler.job import JobDefinition, RuntimeContext
from vercel_local_cron.application.scheduler.scheduler import CronScheduler, SchedulerState
from vercel_local_cron.application.scheduler.trigger import Trigger

__all__ = [
    "CronEvaluator",
    "CronScheduler",
    "CrontabEvaluator",
    "EvaluatorFactory",
    "JobDefinition",
    "RuntimeContext",
    "SchedulerState",
    "Trigger",
]
