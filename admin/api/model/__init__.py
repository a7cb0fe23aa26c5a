"""Admin API 모델 패키지"""

from admin.api.model.job import (
    HealthResponse,
    JobResponse,
    JobListResponse,
)

__all__ = [
    'HealthResponse',
    'JobResponse',
    'JobListResponse',
]
