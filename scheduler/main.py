"""
크론 잡 등록 진입점

정적 잡 목록의 각 스케줄을 스케줄러에 바인딩합니다.
실행 시점마다 RetryExecutor가 잡의 name, task, retries로 호출됩니다.
"""

import logging
from typing import Sequence

from scheduler.cron import BaseScheduler, Callback
from scheduler.executor import RetryExecutor
from scheduler.model import JobDescriptor

logger = logging.getLogger(__name__)


def _make_callback(job: JobDescriptor, executor: RetryExecutor) -> Callback:
    async def run() -> None:
        await executor.execute(job.name, job.task, job.retries)

    return run


def register_all_cron_jobs(
    jobs: Sequence[JobDescriptor],
    scheduler: BaseScheduler,
    executor: RetryExecutor,
) -> None:
    """
    모든 잡을 스케줄러에 등록

    중복 방지를 하지 않으므로 두 번 호출하면 모든 잡이 틱마다 두 번 실행됩니다.
    프로세스당 한 번만 호출해야 합니다.
    """
    for job in jobs:
        scheduler.schedule(job.schedule, _make_callback(job, executor), name=job.slug)
        logger.info(f'Scheduled job: "{job.name}" ({job.schedule})')
