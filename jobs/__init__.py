"""정적 잡 목록"""

from jobs.exception import JobNotFoundError
from jobs.registry import JOBS, get_job

__all__ = ["JOBS", "get_job", "JobNotFoundError"]
