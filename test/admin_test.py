"""
Admin API 테스트

테스트 항목:
1. GET / 실행 확인 메시지
2. GET /health 스케줄러 활성 여부
3. GET /api/jobs 잡 목록 (스케줄러 있으면 next_run_time 포함)
4. GET /api/jobs/{slug} 상세 조회, 없는 slug 404

실행: python -m pytest test/admin_test.py -v
"""

import logging
import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# 프로젝트 루트 경로 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from admin.main import create_app
from jobs import JOBS
from scheduler import CronScheduler, SchedulerConfig

# 테스트용 로깅 설정
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@pytest_asyncio.fixture
async def client():
    """스케줄러 없는 (API 전용) 프로세스"""
    app = create_app(JOBS)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def scheduler_client():
    """스케줄러가 활성화된 프로세스"""
    app = create_app(JOBS, CronScheduler(SchedulerConfig()))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


class TestIndex:
    """루트 및 헬스체크"""

    @pytest.mark.asyncio
    async def test_index(self, client):
        """실행 확인 메시지"""
        response = await client.get("/")
        assert response.status_code == 200
        assert response.text == "Cron scheduler running"

    @pytest.mark.asyncio
    async def test_health_without_scheduler(self, client):
        """API 전용 프로세스"""
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "scheduler_enabled": False,
            "scheduler_running": False,
        }

    @pytest.mark.asyncio
    async def test_health_with_scheduler(self, scheduler_client):
        """스케줄러 프로세스 (start 전)"""
        response = await scheduler_client.get("/health")
        data = response.json()
        assert data["scheduler_enabled"] is True
        assert data["scheduler_running"] is False


class TestJobApi:
    """잡 조회 API"""

    @pytest.mark.asyncio
    async def test_list_jobs(self, client):
        """잡 목록 조회"""
        response = await client.get("/api/jobs")
        assert response.status_code == 200

        data = response.json()
        assert data["total"] == len(JOBS)
        assert [item["slug"] for item in data["items"]] == [job.slug for job in JOBS]
        assert all(item["next_run_time"] is None for item in data["items"])

    @pytest.mark.asyncio
    async def test_list_jobs_with_next_run_time(self, scheduler_client):
        """스케줄러가 있으면 다음 실행 시점 포함"""
        response = await scheduler_client.get("/api/jobs")
        items = response.json()["items"]
        assert all(item["next_run_time"] is not None for item in items)

    @pytest.mark.asyncio
    async def test_get_job(self, client):
        """잡 상세 조회"""
        response = await client.get("/api/jobs/process-pending-payments")
        assert response.status_code == 200
        assert response.json() == {
            "name": "Process Pending Payments",
            "slug": "process-pending-payments",
            "schedule": "0 1 * * *",
            "retries": 3,
            "next_run_time": None,
        }

    @pytest.mark.asyncio
    async def test_get_job_not_found(self, client):
        """없는 slug는 404"""
        response = await client.get("/api/jobs/no-such-job")
        assert response.status_code == 404
        assert "no-such-job" in response.json()["detail"]
