"""
HTTP endpoints for dclone-tracker observability.

This module implements health, metrics, status and info endpoints
for monitoring and operational visibility.
"""

from typing import Optional
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response, JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
import time
from dclone_tracker.settings import Settings
from dclone_tracker.orchestrators.scheduler import Scheduler
from dclone_tracker.observability import metrics as m
from dclone_tracker.observability.logging_setup import get_logger

log = get_logger("dclone.http")

def create_app(settings: Settings, scheduler: Optional[Scheduler] = None) -> FastAPI:
    """FastAPI 애플리케이션을 생성합니다."""
    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="DClone status tracker"
    )

    start_time = time.time()

    @app.get("/health")
    async def health():
        """헬스 체크 엔드포인트"""
        return JSONResponse({
            "status": "ok",
            "service": settings.observability.service_name,
            "timestamp": time.time()
        })

    @app.get("/metrics")
    async def metrics():
        """Prometheus 메트릭 엔드포인트"""
        if not settings.observability.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")

        m.uptime_seconds.set(time.time() - start_time)
        try:
            return Response(
                generate_latest(),
                media_type=CONTENT_TYPE_LATEST
            )
        except Exception as e:
            log.error(f"메트릭 생성 오류: {e}")
            raise HTTPException(status_code=500, detail="Metrics generation failed")

    @app.get("/status")
    async def status():
        """지역별 현재 진행도"""
        if scheduler is None:
            raise HTTPException(status_code=503, detail="Scheduler not running")
        return JSONResponse({
            "state": scheduler.state.value,
            "ticks": scheduler.ticks,
            "regions": scheduler.status.snapshot()
        })

    @app.get("/info")
    async def info():
        """서비스 정보 엔드포인트"""
        uptime = time.time() - start_time
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "uptime_seconds": int(uptime),
            "url": settings.endpoint.url(),
            "interval_sec": settings.polling.interval_sec,
            "metrics_enabled": settings.observability.metrics_enabled,
            "log_level": settings.observability.log_level
        })

    return app
