"""잡 조회 핸들러"""

import logging
from typing import Sequence

from admin.api.model.job import JobResponse
from jobs import get_job
from scheduler import CronScheduler, JobDescriptor

logger = logging.getLogger(__name__)


class JobHandler:
    """정적 잡 목록 조회 핸들러"""

    def __init__(self, jobs: Sequence[JobDescriptor], scheduler: CronScheduler | None = None):
        self._jobs = tuple(jobs)
        self._scheduler = scheduler

    @property
    def scheduler_enabled(self) -> bool:
        return self._scheduler is not None

    @property
    def scheduler_running(self) -> bool:
        return self._scheduler is not None and self._scheduler.is_running

    def _to_response(self, job: JobDescriptor) -> JobResponse:
        """JobDescriptor를 JobResponse로 변환"""
        next_run_time = None
        if self._scheduler is not None:
            next_run_time = self._scheduler.next_run_time(job.schedule)
        return JobResponse(
            name=job.name,
            slug=job.slug,
            schedule=job.schedule,
            retries=job.retries,
            next_run_time=next_run_time,
        )

    def get_list(self) -> list[JobResponse]:
        """잡 목록 조회 (등록 순서)"""
        return [self._to_response(job) for job in self._jobs]

    def get_by_slug(self, slug: str) -> JobResponse:
        """
        잡 상세 조회

        Raises:
            JobNotFoundError: slug에 해당하는 잡이 없는 경우
        """
        return self._to_response(get_job(slug, self._jobs))
