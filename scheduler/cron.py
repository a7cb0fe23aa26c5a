"""
CronScheduler: 크론 표현식 기반 스케줄링 모듈

등록된 크론 표현식이 벽시계 시간과 일치할 때마다 콜백을 호출합니다.
하나의 타이머 루프가 모든 엔트리 중 가장 가까운 실행 시점까지 대기한 뒤,
해당 시점에 일치하는 엔트리의 콜백을 별도 태스크로 실행합니다.

- 콜백은 대기하지 않음 (느린 잡이 다음 실행과 겹칠 수 있음)
- 타임존 미지정 시 호스트 로컬 시간 기준
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta, tzinfo
from itertools import count
from typing import Awaitable, Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from croniter import croniter

from scheduler.exception import CronParseError, InvalidTimezoneError
from scheduler.model import SchedulerConfig, validate_cron_expression

logger = logging.getLogger(__name__)

Callback = Callable[[], Awaitable[None]]

_entry_ids = count(1)


@dataclass(frozen=True)
class ScheduledEntry:
    """스케줄 등록 정보"""
    expression: str
    callback: Callback = field(compare=False)
    name: str | None = None
    id: int = field(default_factory=lambda: next(_entry_ids))


class BaseScheduler(ABC):
    """
    스케줄링 기본 인터페이스

    크론 표현식과 인자 없는 콜백을 받아, 표현식이 현재 시간과 일치할 때마다
    콜백을 호출합니다.
    """

    @abstractmethod
    def schedule(self, expression: str, callback: Callback, name: str | None = None) -> ScheduledEntry:
        """
        콜백 등록

        Args:
            expression: 5필드 크론 표현식
            callback: 실행 시점마다 호출할 코루틴 함수
            name: 로그용 이름

        Raises:
            CronParseError: 크론 표현식이 유효하지 않은 경우
        """
        ...


def resolve_timezone(name: str | None) -> tzinfo | None:
    """IANA 타임존 이름 -> tzinfo (None이면 로컬 시간)"""
    if name is None:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidTimezoneError(name) from e


class CronScheduler(BaseScheduler):
    """
    asyncio 기반 크론 스케줄러

    schedule()로 등록하고 start()로 타이머 루프를 시작합니다.
    start() 이후 등록된 엔트리도 즉시 반영됩니다.
    """

    def __init__(self, config: SchedulerConfig | None = None):
        self._config = config or SchedulerConfig()
        self._tz = resolve_timezone(self._config.timezone)
        self._entries: list[ScheduledEntry] = []
        self._running = False
        self._wakeup: asyncio.Event | None = None
        self._callback_tasks: set[asyncio.Task] = set()

    def schedule(self, expression: str, callback: Callback, name: str | None = None) -> ScheduledEntry:
        """콜백 등록 (중복 등록 허용)"""
        validate_cron_expression(expression)

        entry = ScheduledEntry(expression=expression, callback=callback, name=name)
        self._entries.append(entry)
        logger.debug(f"Registered cron entry: id={entry.id}, name={name}, expression='{expression}'")

        # 실행 중이면 대기 시간 재계산
        if self._running and self._wakeup:
            self._wakeup.set()
        return entry

    async def start(self) -> None:
        """타이머 루프 시작 (stop() 호출 시까지 반환하지 않음)"""
        if self._running:
            logger.warning("CronScheduler is already running")
            return

        self._running = True
        self._wakeup = asyncio.Event()

        logger.info(
            f"CronScheduler started (entries={len(self._entries)}, "
            f"timezone={self._config.timezone or 'local'})"
        )

        try:
            await self._main_loop()
        except asyncio.CancelledError:
            logger.info("CronScheduler cancelled")
        finally:
            self._running = False
            logger.info("CronScheduler stopped")

    async def stop(self) -> None:
        """
        CronScheduler 종료

        타이머 루프만 멈추며, 실행 중인 콜백과 예약된 재시도는 취소하지 않습니다.
        """
        if not self._running:
            return

        logger.info("Stopping CronScheduler...")
        self._running = False
        if self._wakeup:
            self._wakeup.set()

    def now(self) -> datetime:
        """스케줄 기준 현재 시간 (로컬이면 naive, 타임존 지정 시 aware)"""
        if self._tz is None:
            return datetime.now()
        return datetime.now(self._tz)

    def next_run_time(self, expression: str, now: datetime | None = None) -> datetime:
        """now 이후 첫 실행 시점"""
        base = now or self.now()
        try:
            return croniter(expression, base).get_next(datetime)
        except Exception as e:
            raise CronParseError(expression, str(e))

    def matches(self, expression: str, moment: datetime) -> bool:
        """moment가 속한 분이 크론 표현식과 일치하는지 여부"""
        minute = moment.replace(second=0, microsecond=0)
        return self.next_run_time(expression, minute - timedelta(seconds=1)) == minute

    def dispatch_due(self, moment: datetime) -> int:
        """
        moment에 일치하는 모든 엔트리의 콜백을 실행 (대기하지 않음)

        Returns:
            실행한 콜백 수
        """
        fired = 0
        for entry in list(self._entries):
            try:
                if self.matches(entry.expression, moment):
                    self._dispatch(entry)
                    fired += 1
            except Exception as e:
                # 개별 엔트리 에러는 격리하여 다른 엔트리 실행에 영향을 주지 않음
                logger.error(f"Error dispatching cron entry '{entry.name}': {e}", exc_info=True)
        return fired

    async def _main_loop(self) -> None:
        """메인 루프: 다음 실행 시점까지 대기 후 일치하는 엔트리 실행"""
        last_tick: datetime | None = None

        while self._running:
            now = self.now()
            base = now if last_tick is None or now > last_tick else last_tick
            next_tick = self._next_tick(base)

            if next_tick is None:
                # 등록된 엔트리 없음: 등록 또는 종료까지 대기
                await self._wait(None)
                continue

            # 시계 변경/절전 복귀에 대비해 max_sleep_seconds 단위로 나눠서 대기
            remaining = next_tick.timestamp() - time.time()
            await self._wait(min(remaining, self._config.max_sleep_seconds))
            if not self._running:
                break
            if time.time() < next_tick.timestamp():
                # 아직 실행 시점 전 (엔트리 추가, 최대 대기 도달, 시계 되돌림): 재계산
                continue

            fired = self.dispatch_due(next_tick)
            logger.debug(f"Tick {next_tick.isoformat()}: dispatched {fired} callbacks")
            last_tick = next_tick

    def _next_tick(self, base: datetime) -> datetime | None:
        """모든 엔트리 중 가장 빠른 다음 실행 시점"""
        next_times = []
        for entry in self._entries:
            try:
                next_times.append(self.next_run_time(entry.expression, base))
            except CronParseError as e:
                logger.error(f"Cron parse error for entry '{entry.name}': {e}")
        return min(next_times) if next_times else None

    async def _wait(self, timeout: float | None) -> bool:
        """
        인터럽트 가능한 sleep

        Returns:
            True: stop() 또는 schedule()로 깨어남
            False: 타임아웃
        """
        if timeout is not None:
            timeout = max(0.0, timeout)
        try:
            await asyncio.wait_for(self._wakeup.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return False
        self._wakeup.clear()
        return True

    def _dispatch(self, entry: ScheduledEntry) -> None:
        """콜백을 별도 태스크로 실행"""
        logger.debug(f"Dispatching cron entry: id={entry.id}, name={entry.name}")
        task = asyncio.get_running_loop().create_task(
            entry.callback(),
            name=f"cron:{entry.name or entry.id}",
        )
        self._callback_tasks.add(task)
        task.add_done_callback(self._on_callback_done)

    def _on_callback_done(self, task: asyncio.Task) -> None:
        """콜백 완료 콜백"""
        self._callback_tasks.discard(task)
        if not task.cancelled() and task.exception():
            logger.error(f"Cron callback {task.get_name()} raised: {task.exception()}")

    @property
    def entries(self) -> list[ScheduledEntry]:
        """등록된 엔트리 목록 (중복 포함)"""
        return list(self._entries)

    @property
    def is_running(self) -> bool:
        """실행 중 여부"""
        return self._running

    @property
    def running_callback_count(self) -> int:
        """실행 중인 콜백 수"""
        return len(self._callback_tasks)
