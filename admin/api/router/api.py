"""Admin API 라우터"""

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse

from admin.api.handler.job import JobHandler
from admin.api.model.job import HealthResponse, JobResponse, JobListResponse
from jobs.exception import JobNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_job_handler(request: Request) -> JobHandler:
    """create_app()에서 등록한 핸들러 인스턴스"""
    return request.app.state.job_handler


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def index():
    """서버 실행 확인"""
    return "Cron scheduler running"


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health(request: Request):
    """헬스체크"""
    handler = get_job_handler(request)
    return HealthResponse(
        scheduler_enabled=handler.scheduler_enabled,
        scheduler_running=handler.scheduler_running,
    )


# ============================================
# JOB API
# ============================================

@router.get("/api/jobs", response_model=JobListResponse, tags=["Job"])
async def get_jobs(request: Request):
    """잡 목록 조회"""
    items = get_job_handler(request).get_list()
    return JobListResponse(items=items, total=len(items))


@router.get("/api/jobs/{slug}", response_model=JobResponse, tags=["Job"])
async def get_job(request: Request, slug: str):
    """잡 상세 조회"""
    try:
        return get_job_handler(request).get_by_slug(slug)
    except JobNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
