from dclone_tracker.core.models import NotificationEvent
from dclone_tracker.core.severity import build_event
from dclone_tracker.ports.dispatch import NotificationSinkPort
from dclone_tracker.observability import metrics


class ChangeNotifier:
    """지역 값 변경을 알림 이벤트로 만들어 싱크로 보냅니다."""

    def __init__(self, sink: NotificationSinkPort):
        self.sink = sink

    async def notify(self, region_name: str, old: int, new: int) -> NotificationEvent:
        # 분류 실패(InvalidProgressValue)는 발송 전에 전파됨
        event = build_event(region_name, old, new)
        await self.sink.send(event)
        metrics.notifications_total.labels(region=region_name, urgency=event.urgency.value).inc()
        return event
