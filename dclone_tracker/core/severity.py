"""
Severity classification for dclone-tracker.

This module contains pure functions mapping a progress value to a
notification title and urgency, and building notification events.
"""

from typing import Dict, Tuple
from .errors import InvalidProgressValue
from .models import NotificationEvent, REGION_CODES, Urgency

MIN_PROGRESS = 1
MAX_PROGRESS = 6

# 진행도 -> (제목, 긴급도)
SEVERITY_TABLE: Dict[int, Tuple[str, Urgency]] = {
    1: ("DClone is far away", Urgency.LOW),
    2: ("DClone is nearing...", Urgency.NORMAL),
    3: ("DClone is nearing...", Urgency.NORMAL),
    4: ("DClone is nearing...", Urgency.NORMAL),
    5: ("DClone is about to walk!", Urgency.CRITICAL),
    6: ("DClone is walking!", Urgency.CRITICAL),
}


def classify(value: int) -> Tuple[str, Urgency]:
    """
    진행도 값을 분류합니다.

    Args:
        value: 진행도 (1~6)

    Returns:
        (알림 제목, 긴급도)

    Raises:
        InvalidProgressValue: 1~6 범위 밖의 값
    """
    try:
        return SEVERITY_TABLE[value]
    except KeyError:
        raise InvalidProgressValue(value) from None


def format_body(old: int, new: int) -> str:
    if old == 0:
        return f"New status: {new}"
    return f"Status changed from {old} to {new}"


def display_name_for_code(code: str) -> str:
    """표시용 지역 이름. 알 수 없는 코드는 "Unknown"."""
    region = REGION_CODES.get(code)
    return region.display_name if region else "Unknown"


def build_event(region_name: str, old: int, new: int) -> NotificationEvent:
    """
    변경 알림 이벤트를 만듭니다.

    Args:
        region_name: 표시용 지역 이름
        old: 이전 값 (0이면 최초 관측)
        new: 새 값

    Raises:
        InvalidProgressValue: new가 분류 범위 밖
    """
    title, urgency = classify(new)
    return NotificationEvent(
        region_name=region_name,
        old_value=old,
        new_value=new,
        title=f"{region_name}: {title}",
        urgency=urgency,
        body=format_body(old, new),
    )
