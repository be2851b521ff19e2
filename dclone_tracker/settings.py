# dclone_tracker/settings.py
from __future__ import annotations
from pydantic import BaseModel, Field, field_validator

from dclone_tracker import __version__

class Endpoint(BaseModel):
    base_url: str = "https://diablo2.io/dclone_api.php"
    ladder: bool = False                      # 기본: non-ladder
    hardcore: bool = False                    # 기본: softcore
    user_agent: str = f"dclone-tracker/{__version__} https://github.com/tronje/dclone-tracker"
    timeout_sec: float = 30.0

    def url(self) -> str:
        """ladder/hardcore 플래그를 1(참)/2(거짓)로 인코딩한 조회 URL"""
        ladder = 1 if self.ladder else 2
        hardcore = 1 if self.hardcore else 2
        return f"{self.base_url}?ladder={ladder}&hc={hardcore}"

class Polling(BaseModel):
    interval_sec: float = 90.0
    oneshot: bool = False

    @field_validator("interval_sec")
    @classmethod
    def _positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("interval_sec must be positive")
        return v

class Notify(BaseModel):
    app_name: str = "dclone-tracker"
    app_tag: str = "annihilus"
    # 긴급도별 표시 시간 (초)
    timeout_low_sec: int = 5
    timeout_normal_sec: int = 10
    timeout_critical_sec: int = 30

class Observability(BaseModel):
    http_host: str = "127.0.0.1"             # 기본: 로컬에서만 접근
    http_port: int = 8099
    metrics_enabled: bool = False
    service_name: str = "dclone-tracker"
    build_version: str = __version__
    log_level: str = "DEBUG"

class Settings(BaseModel):
    endpoint: Endpoint = Field(default_factory=Endpoint)
    polling: Polling = Field(default_factory=Polling)
    notify: Notify = Field(default_factory=Notify)
    observability: Observability = Field(default_factory=Observability)
