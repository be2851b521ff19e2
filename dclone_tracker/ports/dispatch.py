"""
Notification dispatch port interface.

This module defines the protocol for the desktop notification sink.
"""

from typing import Protocol
from dclone_tracker.core.models import NotificationEvent

class NotificationSinkPort(Protocol):
    """알림 싱크 포트 인터페이스"""
    
    def init(self) -> None:
        """첫 사용 전에 한 번 초기화합니다. 실패 시 NotifierError."""
        ...
    
    async def send(self, event: NotificationEvent) -> None:
        """
        알림을 발송합니다.
        
        Args:
            event: 알림 이벤트
        
        Raises:
            NotifierError: 발송 실패
        """
        ...
    
    def close(self) -> None:
        """프로세스 종료 시 한 번 정리합니다."""
        ...
