"""
Polling scheduler for dclone-tracker.

This module drives the poll cycle on a fixed interval and races every
wait (the interval timer and the in-flight poll) against a stop event
that SIGINT/SIGTERM set. Exactly one poll runs at a time, and the region
status store is only touched from the scheduler's own coroutine.
"""

import asyncio
import contextlib
import signal
from enum import Enum
from typing import Optional
from dclone_tracker.core.errors import FetchError
from dclone_tracker.core.status import RegionStatus
from dclone_tracker.orchestrators.poll_cycle import PollCycle
from dclone_tracker.observability.logging_setup import get_logger

log = get_logger("dclone.scheduler")

# 종료 시그널 -> 로그 메시지
STOP_SIGNALS = {
    signal.SIGINT: "Interrupted.",
    signal.SIGTERM: "Terminated.",
}

class State(str, Enum):
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"

class Scheduler:
    """고정 주기 폴링 루프"""

    def __init__(self,
                 cycle: PollCycle,
                 *,
                 interval_sec: float = 90.0,
                 status: Optional[RegionStatus] = None):
        """
        초기화합니다.

        Args:
            cycle: 폴링 1회 실행기
            interval_sec: 폴링 주기 (초)
            status: 지역 상태 저장소 (None이면 새로 생성)
        """
        if interval_sec <= 0:
            raise ValueError("interval_sec must be positive")
        self.cycle = cycle
        self.interval = interval_sec
        self.status = status if status is not None else RegionStatus()
        self.state = State.RUNNING
        self.ticks = 0
        self.stop_reason: Optional[str] = None
        self._stop = asyncio.Event()
        self._signals: list[int] = []

    def stop(self, reason: str = "Stopped.") -> None:
        """루프 종료를 요청합니다. 여러 번 호출해도 첫 요청만 반영됩니다."""
        if self._stop.is_set():
            return
        self.stop_reason = reason
        self.state = State.STOPPING
        self._stop.set()

    def install_signal_handlers(self) -> None:
        """SIGINT/SIGTERM을 stop()에 연결합니다. 지원하지 않는 플랫폼은 무시."""
        loop = asyncio.get_running_loop()
        for sig, reason in STOP_SIGNALS.items():
            try:
                loop.add_signal_handler(sig, self.stop, reason)
                self._signals.append(sig)
            except NotImplementedError:
                pass

    def remove_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in self._signals:
            loop.remove_signal_handler(sig)
        self._signals.clear()

    async def run(self) -> None:
        """
        중지 요청이 올 때까지 폴링을 반복합니다.

        첫 폴링은 즉시 실행되고 이후 interval 주기로 실행됩니다. 폴링이
        주기보다 오래 걸리면 밀린 틱은 하나로 합쳐져 바로 다음 폴링이 실행됩니다.
        """
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        try:
            while not self._stop.is_set():
                delay = next_tick - loop.time()
                if delay > 0 and await self._wait_for_stop(delay):
                    break
                if self._stop.is_set():
                    break

                await self._tick()

                next_tick += self.interval
                now = loop.time()
                if next_tick < now:
                    next_tick = now
        finally:
            self.state = State.STOPPED
            log.info(self.stop_reason or "Stopped.")

    async def _wait_for_stop(self, timeout: float) -> bool:
        """timeout 동안 중지 요청을 기다립니다. 중지되면 True."""
        try:
            await asyncio.wait_for(self._stop.wait(), timeout=timeout)
            return True
        except asyncio.TimeoutError:
            return False

    async def _tick(self) -> None:
        """폴링 1회를 중지 요청과 경쟁시켜 실행합니다."""
        poll = asyncio.create_task(self._poll())
        stopper = asyncio.create_task(self._stop.wait())
        try:
            await asyncio.wait({poll, stopper}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            stopper.cancel()
            if not poll.done():
                poll.cancel()
                log.info("진행 중인 폴링 취소됨")
            with contextlib.suppress(asyncio.CancelledError):
                await poll

    async def _poll(self) -> None:
        self.ticks += 1
        try:
            changed = await self.cycle.run(self.status)
        except FetchError as e:
            log.error(f"폴링 실패: {e}")
            return
        except Exception:
            log.exception("폴링 중 예상치 못한 오류")
            return
        log.debug(f"폴링 완료 tick:{self.ticks} changed:{changed} status:{self.status.snapshot()}")
