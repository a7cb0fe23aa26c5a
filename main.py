"""
cronbox 통합 진입점

Admin API 서버를 실행하고, 스케줄러가 활성화된 프로세스에서는
정적 잡 목록을 크론 스케줄러에 등록합니다.

스케줄러 활성화:
    config/app.yaml의 scheduler.enabled 또는 CRON_SERVER 환경 변수 (.env 파일 포함)

사용법:
    python main.py                 # API만 (scheduler.enabled=false)
    CRON_SERVER=1 python main.py   # API + 스케줄러
"""

import sys
import os

# Windows 인코딩 설정 (cp949 -> UTF-8)
if sys.platform == "win32":
    os.environ["PYTHONUTF8"] = "1"

import asyncio
import signal
import logging
from pathlib import Path
from typing import Mapping

import uvicorn
import yaml
from dotenv import dotenv_values
from fastapi import FastAPI
from pydantic import BaseModel, Field

from admin.main import AdminConfig, create_app
from common.logging import LoggingConfig, setup_logging
from jobs import JOBS
from scheduler import CronScheduler, RetryExecutor, SchedulerConfig, register_all_cron_jobs

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent / "config" / "app.yaml"
ENV_PATH = Path(".env")


class SchedulerSection(SchedulerConfig):
    """스케줄러 설정 + 프로세스 게이팅 플래그"""
    enabled: bool = False


class AppConfig(BaseModel):
    """app.yaml 전체 설정"""
    scheduler: SchedulerSection = Field(default_factory=SchedulerSection)
    admin: AdminConfig = Field(default_factory=AdminConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(
    path: Path = CONFIG_PATH,
    env: Mapping[str, str] | None = None,
    env_file: Path | None = ENV_PATH,
) -> AppConfig:
    """
    설정 로드

    환경 변수는 여기서만 읽습니다. env_file(.env)의 값은 실제 환경 변수보다 우선순위가 낮습니다.
    - CRON_SERVER: 값이 있으면 스케줄러 활성화
    - PORT: Admin API 포트
    """
    env = dict(os.environ if env is None else env)
    if env_file is not None and env_file.exists():
        dotenv = {k: v for k, v in dotenv_values(env_file).items() if v is not None}
        env = {**dotenv, **env}

    raw: dict = {}
    if path.exists():
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    # 본문 없는 섹션(`scheduler:`)은 None으로 로드됨
    for section in ("scheduler", "admin", "logging"):
        raw[section] = raw.get(section) or {}

    if env.get("CRON_SERVER"):
        raw["scheduler"]["enabled"] = True
    if env.get("PORT"):
        raw["admin"]["port"] = env["PORT"]

    return AppConfig(**raw)


async def run_scheduler(scheduler: CronScheduler, stop_event: asyncio.Event):
    """CronScheduler 실행"""
    async def wait_stop():
        await stop_event.wait()
        await scheduler.stop()

    asyncio.create_task(wait_stop())
    await scheduler.start()


async def run_admin(app: FastAPI, config: AdminConfig, stop_event: asyncio.Event):
    """Admin API 실행"""
    uv_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level="info",
    )
    server = uvicorn.Server(uv_config)

    async def wait_stop():
        await stop_event.wait()
        server.should_exit = True

    asyncio.create_task(wait_stop())
    logger.info(f"Server is running: http://localhost:{config.port}")
    try:
        await server.serve()
    finally:
        # uvicorn이 시그널을 먼저 처리한 경우에도 다른 모듈을 멈춤
        stop_event.set()


def build_scheduler(config: AppConfig) -> CronScheduler | None:
    """스케줄러 생성 및 잡 등록 (비활성이면 None)"""
    if not config.scheduler.enabled:
        logger.info("Scheduler disabled for this process")
        return None

    scheduler = CronScheduler(config.scheduler)
    executor = RetryExecutor(config.scheduler)
    register_all_cron_jobs(JOBS, scheduler, executor)
    logger.info("Cron jobs registered successfully")
    return scheduler


async def main(config: AppConfig):
    """메인 함수"""
    setup_logging(config.logging)

    scheduler = build_scheduler(config)
    app = create_app(JOBS, scheduler, config.admin)

    # 종료 이벤트
    stop_event = asyncio.Event()

    # 시그널 핸들러
    loop = asyncio.get_running_loop()

    def signal_handler():
        logger.info("Received shutdown signal")
        stop_event.set()

    # Windows는 add_signal_handler를 지원하지 않음
    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, signal_handler)

    # 태스크 생성
    tasks = []
    if scheduler is not None:
        tasks.append(asyncio.create_task(run_scheduler(scheduler, stop_event)))
        logger.info("Scheduler started")
    tasks.append(asyncio.create_task(run_admin(app, config.admin, stop_event)))

    try:
        await asyncio.gather(*tasks)
    except asyncio.CancelledError:
        logger.info("Tasks cancelled")
    finally:
        if scheduler is not None:
            await scheduler.stop()
        logger.info("All modules stopped")


if __name__ == "__main__":
    app_config = load_config()
    modules = ["admin"] + (["scheduler"] if app_config.scheduler.enabled else [])
    print(f"Starting cronbox: {', '.join(modules)}")
    try:
        asyncio.run(main(app_config))
    except KeyboardInterrupt:
        print("\nShutdown requested by user")
