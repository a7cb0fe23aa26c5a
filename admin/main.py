"""Admin API 서버"""

import logging
from typing import Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from admin.api.handler.job import JobHandler
from admin.api.router.api import router
from scheduler import CronScheduler, JobDescriptor

logger = logging.getLogger(__name__)


class CorsConfig(BaseModel):
    """CORS 설정"""
    origins: list[str] = Field(default_factory=lambda: ['*'])
    allow_credentials: bool = True
    allow_methods: list[str] = Field(default_factory=lambda: ['*'])
    allow_headers: list[str] = Field(default_factory=lambda: ['*'])


class AdminConfig(BaseModel):
    """Admin API 설정 (app.yaml의 admin 섹션)"""
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    cors: CorsConfig = Field(default_factory=CorsConfig)


def create_app(
    jobs: Sequence[JobDescriptor],
    scheduler: CronScheduler | None = None,
    config: AdminConfig | None = None,
) -> FastAPI:
    """
    FastAPI 앱 생성

    Args:
        jobs: 정적 잡 목록
        scheduler: 실행 중인 스케줄러 (스케줄러 비활성 프로세스면 None)
        config: Admin 설정
    """
    config = config or AdminConfig()

    app = FastAPI(
        title="cronbox Admin API",
        description="크론 잡 조회 API",
        version="1.0.0",
    )
    app.state.job_handler = JobHandler(jobs, scheduler)

    # CORS 설정
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.origins,
        allow_credentials=config.cors.allow_credentials,
        allow_methods=config.cors.allow_methods,
        allow_headers=config.cors.allow_headers,
    )

    # API 라우터 등록
    app.include_router(router)

    return app
