"""
Desktop notification sink for dclone-tracker.

This module drives plyer's freedesktop D-Bus notification backend. The
subprocess backends (notify-send, the flatpak portal) never report a failed
delivery and drop the urgency, so only the D-Bus backend is accepted.
The D-Bus call is blocking, so it runs in a worker thread to keep the
polling loop responsive to signals.
"""

import asyncio
from typing import Any, Dict, Optional
from plyer.platforms.linux.notification import NotifyDbus
from dclone_tracker.core.errors import NotifierError
from dclone_tracker.core.models import NotificationEvent, Urgency
from dclone_tracker.observability.logging_setup import get_logger

log = get_logger("dclone.desktop")

NOTIFICATIONS_BUS_NAME = "org.freedesktop.Notifications"

# freedesktop 알림 사양의 urgency 힌트 값 (BYTE)
URGENCY_HINTS: Dict[Urgency, int] = {
    Urgency.LOW: 0,
    Urgency.NORMAL: 1,
    Urgency.CRITICAL: 2,
}

def _import_dbus():
    try:
        import dbus
    except ImportError as e:
        raise NotifierError(
            "dbus-python is required for desktop notifications "
            "(pip install 'dclone-tracker[dbus]')"
        ) from e
    return dbus

class DesktopNotifier:
    """plyer D-Bus 백엔드 기반 데스크톱 알림 싱크"""

    def __init__(self,
                 app_name: str,
                 app_tag: str,
                 *,
                 timeouts: Dict[Urgency, int] | None = None):
        """
        초기화합니다.

        Args:
            app_name: 알림에 표시될 애플리케이션 이름
            app_tag: 애플리케이션 태그 (아이콘 이름)
            timeouts: 긴급도별 표시 시간 (초)
        """
        self.app_name = app_name
        self.app_tag = app_tag
        self.timeouts = timeouts or {Urgency.LOW: 5, Urgency.NORMAL: 10, Urgency.CRITICAL: 30}
        self._dbus: Any = None
        self._backend: Optional[NotifyDbus] = None

    @property
    def initialized(self) -> bool:
        return self._backend is not None

    def init(self) -> None:
        """
        세션 버스와 알림 서버를 확인하고 D-Bus 백엔드를 준비합니다.

        Raises:
            NotifierError: 이미 초기화됨, dbus-python 없음, 세션 버스 연결 실패,
                또는 세션 버스에 알림 서버가 없음
        """
        if self.initialized:
            raise NotifierError("notifier already initialized")

        dbus = _import_dbus()
        try:
            bus = dbus.SessionBus()
            names = set(bus.list_names()) | set(bus.list_activatable_names())
        except dbus.exceptions.DBusException as e:
            raise NotifierError(f"cannot connect to the D-Bus session bus: {e}") from e

        if NOTIFICATIONS_BUS_NAME not in names:
            raise NotifierError(f"no notification server ({NOTIFICATIONS_BUS_NAME}) on the session bus")

        self._dbus = dbus
        self._backend = NotifyDbus()
        log.info(f"데스크톱 알림 초기화됨 app_name:{self.app_name}")

    def close(self) -> None:
        if self.initialized:
            self._backend = None
            self._dbus = None
            log.info("데스크톱 알림 종료됨")

    async def send(self, event: NotificationEvent) -> None:
        """
        알림을 발송합니다.

        Args:
            event: 알림 이벤트

        Raises:
            NotifierError: 초기화 전 호출 또는 D-Bus 호출 실패
        """
        if not self.initialized:
            raise NotifierError("notifier used before init()")

        try:
            await asyncio.to_thread(
                self._backend.notify,
                title=event.title,
                message=event.body,
                app_name=self.app_name,
                app_icon=self.app_tag,
                timeout=self.timeouts[event.urgency],
                hints={"urgency": self._dbus.Byte(URGENCY_HINTS[event.urgency])},
            )
        except Exception as e:
            raise NotifierError(f"notification failed: {e}") from e

        log.info(f"알림 발송 title:{event.title} body:{event.body} urgency:{event.urgency.value}")
