"""잡 관련 모델 정의"""

from datetime import datetime

from pydantic import BaseModel


class JobResponse(BaseModel):
    """잡 정의 응답 모델"""
    name: str
    slug: str
    schedule: str
    retries: int | None = None
    next_run_time: datetime | None = None


class JobListResponse(BaseModel):
    """잡 목록 응답"""
    items: list[JobResponse]
    total: int


class HealthResponse(BaseModel):
    """헬스체크 응답"""
    status: str = "ok"
    scheduler_enabled: bool
    scheduler_running: bool = False
