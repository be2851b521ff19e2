# dclone_tracker/main.py
import argparse
import asyncio
import os
import sys
from typing import List, Optional
from dclone_tracker.settings import Settings
from dclone_tracker.core.errors import FetchError, NotifierError
from dclone_tracker.core.models import Urgency
from dclone_tracker.adapters.diablo2io.client import Diablo2ioClient
from dclone_tracker.adapters.desktop.notifier import DesktopNotifier
from dclone_tracker.dispatch.notifier import ChangeNotifier
from dclone_tracker.orchestrators.poll_cycle import PollCycle
from dclone_tracker.orchestrators.scheduler import Scheduler
from dclone_tracker.observability.logging_setup import setup_logging, get_logger
from dclone_tracker.observability.server import start_http, stop_http

log = get_logger("dclone")

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dclone-tracker",
        description="Get notified whenever DClone status changes"
    )
    parser.add_argument("--interval", type=float, default=90,
                        help="query interval (seconds)")
    parser.add_argument("--ladder", action="store_true",
                        help="ladder realm (by default, non-ladder is queried)")
    parser.add_argument("--hardcore", action="store_true",
                        help="hardcore realm (by default, softcore is queried)")
    parser.add_argument("--oneshot", action="store_true",
                        help="don't monitor, just query the state once")
    parser.add_argument("--metrics-port", type=int, default=None,
                        help="serve /health, /status and /metrics on this port")
    args = parser.parse_args(argv)
    if args.interval <= 0:
        parser.error("--interval must be positive")
    return args

def build_settings(args: argparse.Namespace) -> Settings:
    s = Settings()
    s.endpoint.ladder = args.ladder
    s.endpoint.hardcore = args.hardcore
    s.polling.interval_sec = args.interval
    s.polling.oneshot = args.oneshot

    if args.metrics_port is not None:
        s.observability.metrics_enabled = True
        s.observability.http_port = args.metrics_port

    # 로그 레벨은 환경변수 우선
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)
    return s

def build_client(settings: Settings) -> Diablo2ioClient:
    return Diablo2ioClient(
        url=settings.endpoint.url(),
        user_agent=settings.endpoint.user_agent,
        timeout=settings.endpoint.timeout_sec
    )

def build_notifier(settings: Settings) -> DesktopNotifier:
    n = settings.notify
    return DesktopNotifier(
        app_name=n.app_name,
        app_tag=n.app_tag,
        timeouts={
            Urgency.LOW: n.timeout_low_sec,
            Urgency.NORMAL: n.timeout_normal_sec,
            Urgency.CRITICAL: n.timeout_critical_sec,
        }
    )

async def run_once(settings: Settings) -> None:
    """상태를 한 번 조회해 로그로 출력합니다. 알림은 초기화하지 않습니다."""
    async with build_client(settings) as client:
        await PollCycle(client).run_once()

async def run(settings: Settings, sink: Optional[DesktopNotifier] = None) -> Scheduler:
    """시그널을 받을 때까지 상태를 감시합니다."""
    sink = sink or build_notifier(settings)
    sink.init()
    try:
        async with build_client(settings) as client:
            cycle = PollCycle(client, ChangeNotifier(sink))
            scheduler = Scheduler(cycle, interval_sec=settings.polling.interval_sec)
            scheduler.install_signal_handlers()
            http = await start_http(settings, scheduler)
            try:
                await scheduler.run()
            finally:
                scheduler.remove_signal_handlers()
                await stop_http(http)
            return scheduler
    finally:
        sink.close()

async def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    s = build_settings(args)
    setup_logging(s.observability.log_level)

    log.info("Data courtesy of diablo2.io")

    if s.polling.oneshot:
        try:
            await run_once(s)
        except FetchError as e:
            log.error(f"조회 실패: {e}")
            return 1
        return 0

    try:
        await run(s)
    except NotifierError as e:
        log.error(f"알림 초기화 실패: {e}")
        return 1
    return 0

def cli() -> None:
    sys.exit(asyncio.run(main()))

if __name__ == "__main__":
    cli()
