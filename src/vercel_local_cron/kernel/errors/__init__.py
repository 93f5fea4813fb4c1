"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   └── ScheduleError
    ├── ApplicationError         (application.py)
    │   └── ConfigurationError   (config/validation/errors.py)
    └── InfrastructureError      (infrastructure.py)
        └── ProcessError
"""

from vercel_local_cron.kernel.errors.application import ApplicationError
from vercel_local_cron.kernel.errors.base import BaseError
from vercel_local_cron.kernel.errors.domain import DomainError, ScheduleError
from vercel_local_cron.kernel.errors.infrastructure import InfrastructureError, ProcessError

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "InfrastructureError",
    "ProcessError",
    "ScheduleError",
]
