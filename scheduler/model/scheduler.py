"""
Scheduler 설정 모델
"""

from pydantic import BaseModel, Field


class SchedulerConfig(BaseModel):
    """CronScheduler / RetryExecutor 설정"""
    timezone: str | None = Field(default=None, description="IANA 타임존 (None이면 호스트 로컬 시간)")
    retry_delay_seconds: float = Field(default=10.0, gt=0, description="재시도 대기 시간 (고정)")
    max_sleep_seconds: float = Field(default=60.0, gt=0, le=3600, description="타이머 루프 1회 최대 대기 시간")
