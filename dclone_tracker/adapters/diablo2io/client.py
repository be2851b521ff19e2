"""
diablo2.io DClone status API client for dclone-tracker.

This module provides an aiohttp based client that fetches the
per-region DClone progress records.
"""

import asyncio
import aiohttp
from typing import List, Optional
from dclone_tracker.core.errors import FetchError, ParseError
from dclone_tracker.core.models import ProgressRecord
from dclone_tracker.observability.logging_setup import get_logger

log = get_logger("dclone.diablo2io")

class Diablo2ioClient:
    """DClone 상태 API 클라이언트"""

    def __init__(self,
                 url: str,
                 user_agent: str,
                 timeout: Optional[float] = 30):
        """
        초기화합니다.

        Args:
            url: 조회 URL (ladder/hc 쿼리 포함)
            user_agent: User-Agent 헤더
            timeout: 요청 타임아웃 (초), None이면 무제한
        """
        self.url = url
        self.user_agent = user_agent
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

        log.info(f"상태 API 클라이언트 초기화됨 url:{url}")

    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        self.session = aiohttp.ClientSession(
            headers={"User-Agent": self.user_agent},
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        if self.session:
            await self.session.close()
            self.session = None

    async def fetch(self) -> List[ProgressRecord]:
        """
        상태 API를 한 번 조회합니다.

        Returns:
            진행도 레코드 목록

        Raises:
            FetchError: 네트워크 오류, HTTP 오류 상태, 응답 역직렬화 실패
        """
        if not self.session:
            raise RuntimeError("세션이 초기화되지 않았습니다. async with를 사용하세요.")

        try:
            async with self.session.get(self.url) as response:
                response.raise_for_status()
                # 서버가 content-type을 보장하지 않으므로 검사하지 않음
                data = await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise FetchError(f"request timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            raise FetchError(f"request failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"invalid JSON response: {e}") from e

        log.debug(f"응답 수신 data:{data}")
        return self._to_records(data)

    @staticmethod
    def _to_records(data) -> List[ProgressRecord]:
        if not isinstance(data, list):
            raise FetchError(f"expected a JSON array, got {type(data).__name__}")
        try:
            return [ProgressRecord.from_raw(item) for item in data]
        except ParseError as e:
            raise FetchError(str(e)) from e
