"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import inspect
import pytest
from typing import List
from loguru import logger
from dclone_tracker.settings import Settings
from dclone_tracker.core.errors import NotifierError
from dclone_tracker.core.models import NotificationEvent, ProgressRecord


class FakeSource:
    """
    응답을 순서대로 돌려주는 테스트용 수집 포트.

    각 응답은 (region, progress) 튜플 목록 또는 발생시킬 예외입니다.
    마지막 응답은 계속 반복됩니다.
    """

    def __init__(self, *responses):
        self.responses = list(responses) or [[]]
        self.calls = 0

    async def fetch(self) -> List[ProgressRecord]:
        self.calls += 1
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return [ProgressRecord(region=region, progress=progress) for region, progress in response]


class RecordingSink:
    """발송된 알림을 기록하는 테스트용 알림 싱크"""

    def __init__(self):
        self.events: List[NotificationEvent] = []
        self.fail = False
        self.initialized = False
        self.closed = False

    def init(self) -> None:
        self.initialized = True

    async def send(self, event: NotificationEvent) -> None:
        if self.fail:
            raise NotifierError("sink unreachable")
        self.events.append(event)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_source():
    """FakeSource 생성자"""
    return FakeSource


@pytest.fixture
def sink():
    """테스트용 알림 싱크"""
    return RecordingSink()


@pytest.fixture
def sample_settings():
    """테스트용 설정"""
    settings = Settings()
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    settings.observability.log_level = "INFO"
    settings.observability.http_port = 8080
    return settings


@pytest.fixture
def log_messages():
    """loguru 로그를 (레벨, 메시지) 목록으로 수집"""
    messages = []
    handler_id = logger.add(
        lambda m: messages.append((m.record["level"].name, m.record["message"])),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)


# pytest 설정
def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "slow: 느린 테스트 마커"
    )
    config.addinivalue_line(
        "markers", "integration: 통합 테스트 마커"
    )


def pytest_collection_modifyitems(config, items):
    """테스트 아이템 수정"""
    for item in items:
        # 비동기 테스트에 asyncio 마커 추가
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)

        # 통합 테스트 마커 추가
        if "integration" in item.name:
            item.add_marker(pytest.mark.integration)
