"""
Scheduler 모델
"""

from scheduler.model.job import (
    ExecutionAttempt,
    JobDescriptor,
    Task,
    validate_cron_expression,
)
from scheduler.model.scheduler import SchedulerConfig

__all__ = [
    "ExecutionAttempt",
    "JobDescriptor",
    "SchedulerConfig",
    "Task",
    "validate_cron_expression",
]
