"""
HTTP server runner for dclone-tracker observability.

This module runs the FastAPI app with uvicorn inside the tracker's
event loop. Signal handling stays with the scheduler.
"""

import asyncio
import contextlib
from typing import Optional, Tuple
import uvicorn
from dclone_tracker.settings import Settings
from dclone_tracker.orchestrators.scheduler import Scheduler
from dclone_tracker.observability.health import create_app
from dclone_tracker.observability.logging_setup import get_logger

log = get_logger("dclone.http")

class EmbeddedServer(uvicorn.Server):
    """시그널 핸들러를 설치하지 않는 uvicorn 서버"""

    def install_signal_handlers(self) -> None:
        pass

    @contextlib.contextmanager
    def capture_signals(self):
        yield

async def start_http(settings: Settings,
                     scheduler: Optional[Scheduler] = None,
                     host: Optional[str] = None) -> Optional[Tuple[EmbeddedServer, asyncio.Task]]:
    """
    메트릭이 활성화된 경우 HTTP 서버를 백그라운드 태스크로 시작합니다.

    Args:
        host: 바인드 주소 (기본: settings.observability.http_host)

    Returns:
        (서버, 태스크) 또는 비활성화 시 None
    """
    if not settings.observability.metrics_enabled:
        return None

    host = host or settings.observability.http_host
    port = settings.observability.http_port
    server = EmbeddedServer(uvicorn.Config(
        create_app(settings, scheduler),
        host=host,
        port=port,
        log_level=settings.observability.log_level.lower(),
        access_log=False
    ))
    log.info(f"HTTP 서버 시작 중 host:{host} port:{port}")
    return server, asyncio.create_task(server.serve())

async def stop_http(handle: Optional[Tuple[EmbeddedServer, asyncio.Task]]) -> None:
    if handle is None:
        return
    server, task = handle
    server.should_exit = True
    await task
