"""
재시도 실행기 모듈

잡 태스크를 실행하고, 실패 시 고정 지연 후 재시도를 예약합니다.
재시도는 fire-and-forget 방식으로 이벤트 루프 타이머에 등록되며,
호출자는 재시도를 기다리지 않습니다.
"""

import asyncio
import logging
from typing import Any, Callable

from scheduler.model import ExecutionAttempt, SchedulerConfig, Task

logger = logging.getLogger(__name__)

# (delay_seconds, callback) -> 타이머 핸들
Timer = Callable[[float, Callable[[], None]], Any]


class RetryExecutor:
    """
    재시도 래핑 실행기

    - 성공: 성공 로그 후 종료
    - 실패 + (retries and attempt < retries): retry_delay_seconds 후 attempt + 1로 재실행 예약
    - 그 외 실패: 최종 실패 로그 후 종료 (예외 전파 없음)

    retries는 "총 시도 횟수"로 해석되므로 retries=1은 재시도 없음과 동일합니다.
    """

    def __init__(self, config: SchedulerConfig | None = None, timer: Timer | None = None):
        """
        Args:
            config: Scheduler 설정 (retry_delay_seconds 사용)
            timer: 재시도 예약 함수 (미지정 시 running loop의 call_later)
        """
        self._config = config or SchedulerConfig()
        self._timer = timer
        self._scheduled = 0
        self._retry_tasks: set[asyncio.Task] = set()

    @property
    def retry_delay_seconds(self) -> float:
        return self._config.retry_delay_seconds

    @property
    def pending_retries(self) -> int:
        """예약되었지만 아직 끝나지 않은 재시도 수 (타이머 대기 + 실행 중)"""
        return self._scheduled + len(self._retry_tasks)

    async def execute(
        self,
        name: str,
        task: Task,
        retries: int | None = None,
        attempt: int = 1,
    ) -> None:
        """
        잡 실행

        Args:
            name: 잡 이름 (로그용)
            task: 실행할 비동기 태스크
            retries: 총 시도 허용 횟수 (None/0/1이면 재시도 없음)
            attempt: 현재 시도 번호 (1부터)
        """
        await self.run(ExecutionAttempt(name=name, task=task, retries=retries, attempt=attempt))

    async def run(self, attempt: ExecutionAttempt) -> None:
        """ExecutionAttempt 단위 실행"""
        context = attempt.log_context
        logger.info(f"Executing job: {attempt.name}, attempt: {attempt.attempt}", extra=context)

        try:
            await attempt.task()
        except Exception as e:
            logger.error(
                f'Job "{attempt.name}" failed on attempt {attempt.attempt}: {e}',
                exc_info=True,
                extra=context,
            )
            if attempt.should_retry:
                logger.info(
                    f'Retrying job "{attempt.name}" in {self.retry_delay_seconds:g} seconds...',
                    extra=context,
                )
                self._schedule_retry(attempt.next())
            else:
                logger.error(
                    f'Job "{attempt.name}" failed after {attempt.attempt} attempts. Skipping.',
                    extra=context,
                )
            return

        logger.info(f'Job "{attempt.name}" executed successfully.', extra=context)

    def _schedule_retry(self, attempt: ExecutionAttempt) -> None:
        """재시도 예약 (대기하지 않음)"""
        timer = self._timer or asyncio.get_running_loop().call_later
        self._scheduled += 1
        timer(self.retry_delay_seconds, lambda: self._spawn(attempt))

    def _spawn(self, attempt: ExecutionAttempt) -> None:
        """타이머 만료 시 재시도를 별도 태스크로 실행"""
        self._scheduled -= 1
        task = asyncio.get_running_loop().create_task(
            self.run(attempt),
            name=f"retry:{attempt.name}:{attempt.attempt}",
        )
        self._retry_tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        """재시도 태스크 완료 콜백"""
        self._retry_tasks.discard(task)
        if not task.cancelled() and task.exception():
            logger.error(f"Retry task exception: {task.exception()}")
