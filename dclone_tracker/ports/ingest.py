"""
Progress ingestion port interface.

This module defines the protocol for fetching progress records.
"""

from typing import List, Protocol
from dclone_tracker.core.models import ProgressRecord

class ProgressIngestPort(Protocol):
    """진행도 수집 포트 인터페이스"""
    
    async def fetch(self) -> List[ProgressRecord]:
        """
        상태 API를 한 번 조회합니다.
        
        Returns:
            지역별 진행도 레코드 목록
        
        Raises:
            FetchError: 네트워크/HTTP/JSON 오류
        """
        ...
