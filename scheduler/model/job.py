"""
잡 정의 및 실행 시도 모델
"""

from dataclasses import dataclass, replace
from typing import Awaitable, Callable

from croniter import croniter
from pydantic import BaseModel, ConfigDict, Field, field_validator

from scheduler.exception import CronParseError

# 분 시 일 월 요일
CRON_FIELD_COUNT = 5

Task = Callable[[], Awaitable[None]]


def validate_cron_expression(cron_expression: str) -> str:
    """
    5필드 크론 표현식 검증

    Raises:
        CronParseError: 필드 수가 다르거나 croniter가 해석할 수 없는 경우
    """
    fields = cron_expression.split()
    if len(fields) != CRON_FIELD_COUNT:
        raise CronParseError(
            cron_expression,
            f"Expected {CRON_FIELD_COUNT} fields, got {len(fields)}: '{cron_expression}'"
        )
    if not croniter.is_valid(cron_expression):
        raise CronParseError(cron_expression)
    return cron_expression


class JobDescriptor(BaseModel):
    """정적 잡 정의 (등록 후 변경 불가)"""
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    slug: str = Field(pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    schedule: str
    task: Task
    retries: int | None = Field(default=None, ge=0)  # 총 시도 횟수 (None/0/1 = 재시도 없음)

    @field_validator("schedule")
    @classmethod
    def _check_schedule(cls, value: str) -> str:
        try:
            return validate_cron_expression(value)
        except CronParseError as e:
            # pydantic ValidationError로 감싸지도록 ValueError로 변환
            raise ValueError(e.message) from e


@dataclass(frozen=True)
class ExecutionAttempt:
    """트리거/재시도마다 생성되는 실행 시도 정보 (저장하지 않음)"""
    name: str
    task: Task
    retries: int | None = None
    attempt: int = 1

    @property
    def should_retry(self) -> bool:
        """재시도 여부: retries가 설정되어 있고 attempt < retries"""
        return bool(self.retries) and self.attempt < self.retries

    @property
    def log_context(self) -> dict:
        """로그 레코드 extra 필드"""
        return {"job": self.name, "attempt": self.attempt}

    def next(self) -> "ExecutionAttempt":
        """다음 시도"""
        return replace(self, attempt=self.attempt + 1)
