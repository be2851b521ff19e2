"""
Scheduler 단위 테스트

이 모듈은 주기 실행, 중지 요청/시그널 처리, 오류 후 계속 실행을 테스트합니다.
"""

import asyncio
import os
import signal
import pytest
from dclone_tracker.core.errors import FetchError
from dclone_tracker.dispatch.notifier import ChangeNotifier
from dclone_tracker.orchestrators.poll_cycle import PollCycle
from dclone_tracker.orchestrators.scheduler import Scheduler, State


class StubCycle:
    """호출 횟수와 동시 실행 수를 기록하는 폴링 대역"""

    def __init__(self, delay: float = 0, error: Exception | None = None):
        self.delay = delay
        self.error = error
        self.calls = 0
        self.completed = 0
        self.active = 0
        self.max_active = 0
        self.ran = asyncio.Event()

    async def run(self, status) -> int:
        self.calls += 1
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        self.ran.set()
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.error:
                raise self.error
            self.completed += 1
            return 0
        finally:
            self.active -= 1


async def wait_until(predicate, timeout: float = 2.0):
    """조건이 참이 될 때까지 대기"""
    async def _poll():
        while not predicate():
            await asyncio.sleep(0.005)
    await asyncio.wait_for(_poll(), timeout)


class TestSchedulerInitialization:
    """스케줄러 초기화 테스트"""

    def test_initial_state(self):
        """초기 상태는 RUNNING, 저장소는 0"""
        scheduler = Scheduler(StubCycle(), interval_sec=90)

        assert scheduler.state == State.RUNNING
        assert scheduler.interval == 90
        assert scheduler.status.snapshot() == {"Americas": 0, "Europe": 0, "Asia": 0}

    @pytest.mark.parametrize("interval", [0, -1])
    def test_invalid_interval(self, interval):
        """주기는 양수여야 함"""
        with pytest.raises(ValueError):
            Scheduler(StubCycle(), interval_sec=interval)


class TestSchedulerLoop:
    """루프 동작 테스트"""

    async def test_first_tick_is_immediate_and_stop_prevents_next(self):
        """첫 폴링은 즉시, 대기 중 중지 요청 시 추가 폴링 없이 종료"""
        cycle = StubCycle()
        scheduler = Scheduler(cycle, interval_sec=60)
        task = asyncio.create_task(scheduler.run())

        await asyncio.wait_for(cycle.ran.wait(), 1)
        scheduler.stop("Interrupted.")
        await asyncio.wait_for(task, 1)

        assert cycle.calls == 1
        assert scheduler.state == State.STOPPED
        assert scheduler.stop_reason == "Interrupted."

    async def test_stop_before_run(self):
        """실행 전 중지 요청 시 폴링 없음"""
        cycle = StubCycle()
        scheduler = Scheduler(cycle, interval_sec=60)

        scheduler.stop()
        assert scheduler.state == State.STOPPING
        await asyncio.wait_for(scheduler.run(), 1)

        assert cycle.calls == 0
        assert scheduler.state == State.STOPPED

    async def test_stop_is_idempotent(self):
        """첫 중지 사유만 유지"""
        scheduler = Scheduler(StubCycle(), interval_sec=60)
        scheduler.stop("Interrupted.")
        scheduler.stop("Terminated.")
        assert scheduler.stop_reason == "Interrupted."

    async def test_repeats_on_interval(self):
        """주기마다 반복 실행"""
        cycle = StubCycle()
        scheduler = Scheduler(cycle, interval_sec=0.01)
        task = asyncio.create_task(scheduler.run())

        await wait_until(lambda: cycle.calls >= 3)
        scheduler.stop()
        await asyncio.wait_for(task, 1)

        assert scheduler.ticks == cycle.calls

    async def test_fetch_errors_keep_loop_running(self, log_messages):
        """조회 실패는 로그만 남기고 루프는 계속"""
        cycle = StubCycle(error=FetchError("connection refused"))
        scheduler = Scheduler(cycle, interval_sec=0.01)
        task = asyncio.create_task(scheduler.run())

        await wait_until(lambda: cycle.calls >= 3)
        assert scheduler.state == State.RUNNING
        scheduler.stop()
        await asyncio.wait_for(task, 1)

        errors = [m for level, m in log_messages if level == "ERROR"]
        assert any("connection refused" in m for m in errors)

    async def test_unexpected_errors_keep_loop_running(self):
        """예상치 못한 오류도 루프를 멈추지 않음"""
        cycle = StubCycle(error=KeyError("bug"))
        scheduler = Scheduler(cycle, interval_sec=0.01)
        task = asyncio.create_task(scheduler.run())

        await wait_until(lambda: cycle.calls >= 2)
        scheduler.stop()
        await asyncio.wait_for(task, 1)
        assert scheduler.state == State.STOPPED

    async def test_stop_cancels_in_flight_poll(self):
        """진행 중인 폴링은 중지 요청 시 취소됨"""
        cycle = StubCycle(delay=30)
        scheduler = Scheduler(cycle, interval_sec=60)
        task = asyncio.create_task(scheduler.run())

        await asyncio.wait_for(cycle.ran.wait(), 1)
        scheduler.stop("Terminated.")
        await asyncio.wait_for(task, 1)

        assert cycle.calls == 1
        assert cycle.completed == 0
        assert cycle.active == 0

    async def test_slow_polls_never_overlap(self):
        """주기보다 긴 폴링도 동시에 실행되지 않음"""
        cycle = StubCycle(delay=0.03)
        scheduler = Scheduler(cycle, interval_sec=0.005)
        task = asyncio.create_task(scheduler.run())

        await wait_until(lambda: cycle.completed >= 3)
        scheduler.stop()
        await asyncio.wait_for(task, 1)

        assert cycle.max_active == 1

    async def test_status_is_carried_across_ticks(self, make_source, sink):
        """저장소는 틱 사이에 유지되고 변경 시에만 알림"""
        source = make_source([("1", "2")], [("1", "2")], [("1", "5")])
        cycle = PollCycle(source, ChangeNotifier(sink))
        scheduler = Scheduler(cycle, interval_sec=0.01)
        task = asyncio.create_task(scheduler.run())

        await wait_until(lambda: source.calls >= 3)
        scheduler.stop()
        await asyncio.wait_for(task, 1)

        assert [e.body for e in sink.events] == ["New status: 2", "Status changed from 2 to 5"]
        assert scheduler.status.americas == 5


@pytest.mark.skipif(os.name != "posix", reason="시그널 핸들러는 POSIX 전용")
class TestSchedulerSignals:
    """시그널 처리 테스트"""

    @pytest.mark.parametrize("sig,reason", [
        (signal.SIGINT, "Interrupted."),
        (signal.SIGTERM, "Terminated."),
    ])
    async def test_signal_stops_loop(self, sig, reason):
        """SIGINT/SIGTERM 수신 시 추가 폴링 없이 종료"""
        cycle = StubCycle()
        scheduler = Scheduler(cycle, interval_sec=60)
        scheduler.install_signal_handlers()
        try:
            task = asyncio.create_task(scheduler.run())
            await asyncio.wait_for(cycle.ran.wait(), 1)

            os.kill(os.getpid(), sig)
            await asyncio.wait_for(task, 1)
        finally:
            scheduler.remove_signal_handlers()

        assert cycle.calls == 1
        assert scheduler.stop_reason == reason
        assert scheduler.state == State.STOPPED
