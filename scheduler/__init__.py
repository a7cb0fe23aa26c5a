"""Scheduler 모듈 - 크론 기반 잡 트리거 및 재시도 실행"""

from scheduler.cron import BaseScheduler, CronScheduler, ScheduledEntry
from scheduler.exception import CronParseError, InvalidTimezoneError, SchedulerError
from scheduler.executor import RetryExecutor
from scheduler.main import register_all_cron_jobs
from scheduler.model import ExecutionAttempt, JobDescriptor, SchedulerConfig

__all__ = [
    "BaseScheduler",
    "CronScheduler",
    "ScheduledEntry",
    "RetryExecutor",
    "register_all_cron_jobs",
    "ExecutionAttempt",
    "JobDescriptor",
    "SchedulerConfig",
    "SchedulerError",
    "CronParseError",
    "InvalidTimezoneError",
]
