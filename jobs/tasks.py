"""
잡 태스크 구현

각 태스크는 시작/완료 로그를 남기고, 실패 시 에러 로그 후 예외를 다시 발생시켜
RetryExecutor가 재시도 여부를 판단하도록 합니다.
"""

import asyncio
import logging

logger = logging.getLogger(__name__)


async def process_pending_payments() -> None:
    try:
        logger.info("Processing pending payments...")
        await asyncio.sleep(0)  # 결제 처리 로직
        logger.info("Payments processed successfully.")
    except Exception as e:
        logger.error(f"Failed to process payments: {e}")
        raise


async def expire_inactive_subscriptions() -> None:
    try:
        logger.info("Expiring inactive subscriptions...")
        await asyncio.sleep(0)  # 구독 만료 로직
        logger.info("Expired inactive subscriptions.")
    except Exception as e:
        logger.error(f"Failed to expire subscriptions: {e}")
        raise


async def assign_support_agents() -> None:
    try:
        logger.info("Assigning support agents...")
        await asyncio.sleep(0)  # 상담원 배정 로직
        logger.info("Support agents assigned.")
    except Exception as e:
        logger.error(f"Failed to assign support agents: {e}")
        raise


async def generate_daily_reports() -> None:
    try:
        logger.info("Generating daily reports...")
        await asyncio.sleep(0)  # 리포트 생성 로직
        logger.info("Daily reports generated.")
    except Exception as e:
        logger.error(f"Failed to generate reports: {e}")
        raise


async def update_user_status() -> None:
    try:
        logger.info("Updating user statuses...")
        await asyncio.sleep(0)  # 상태 갱신 로직
        logger.info("User statuses updated.")
    except Exception as e:
        logger.error(f"Failed to update user statuses: {e}")
        raise


async def sync_external_data() -> None:
    try:
        logger.info("Syncing external data sources...")
        await asyncio.sleep(0)  # 외부 데이터 동기화 로직
        logger.info("External data sync complete.")
    except Exception as e:
        logger.error(f"Failed to sync external data: {e}")
        raise


async def clear_old_logs() -> None:
    try:
        logger.info("Clearing old logs and cache...")
        await asyncio.sleep(0)  # 정리 로직
        logger.info("Logs and cache cleared.")
    except Exception as e:
        logger.error(f"Failed to clear logs and cache: {e}")
        raise
