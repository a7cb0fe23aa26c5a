"""
로깅 설정

app.yaml의 logging 섹션으로 루트 로거를 구성합니다.
json_format이면 python-json-logger로 한 줄 JSON을 출력하며, 실행기가
extra로 넘긴 잡 컨텍스트(job, attempt)가 필드로 포함됩니다.
"""

import logging
import sys

from pydantic import BaseModel, Field
from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "cronbox"
TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# RetryExecutor가 extra로 전달하는 잡 컨텍스트
JOB_CONTEXT_FIELDS = ("job", "attempt")


class LoggingConfig(BaseModel):
    """로깅 설정 (app.yaml의 logging 섹션)"""
    level: str = Field(default="INFO", pattern=r"(?i)^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    json_format: bool = False
    log_file: str | None = None


class CronboxJsonFormatter(JsonFormatter):
    """
    JSON 로그 포매터

    출력 필드: timestamp, level, logger, service, message (+ job, attempt)
    """

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record['timestamp'] = self.formatTime(record)
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['service'] = SERVICE_NAME
        for key in JOB_CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_record[key] = value


def _build_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return CronboxJsonFormatter('%(message)s')
    return logging.Formatter(TEXT_FORMAT)


def setup_logging(config: LoggingConfig | None = None) -> None:
    """
    루트 로거 설정 (기존 핸들러 교체)

    Args:
        config: 로깅 설정 (None이면 INFO 텍스트 포맷, stdout만 사용)
    """
    config = config or LoggingConfig()
    formatter = _build_formatter(config.json_format)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file, encoding='utf-8'))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=config.level.upper(), handlers=handlers, force=True)

    # 재시도 타이머 / 요청 로그는 스케줄러 로그에 묻히지 않도록
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
