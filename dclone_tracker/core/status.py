"""
Region status store for dclone-tracker.

Holds the last successfully applied progress value per region. The store
is owned by the scheduler and only ever touched from its coroutine, so it
carries no locking.
"""

from typing import Awaitable, Callable, Dict
from pydantic import BaseModel
from .models import Region

NotifyFn = Callable[[str, int, int], Awaitable[object]]


class RegionStatus(BaseModel):
    """지역별 마지막 진행도 (0 = 아직 관측되지 않음)"""
    americas: int = 0
    europe: int = 0
    asia: int = 0

    def get(self, region: Region) -> int:
        return getattr(self, _field(region))

    def snapshot(self) -> Dict[str, int]:
        """지역 표시 이름 -> 값"""
        return {region.display_name: self.get(region) for region in Region}

    async def update(self, region: Region, new: int, notify: NotifyFn) -> bool:
        """
        지역 값을 갱신합니다.

        값이 바뀐 경우 저장 전에 알림을 먼저 보내고, 알림이 성공해야만
        새 값을 저장합니다. 알림이 실패하면 예외가 전파되고 저장된 값은
        그대로 남습니다.

        Args:
            region: 대상 지역
            new: 새 진행도
            notify: (지역 이름, 이전 값, 새 값)을 받는 비동기 알림 함수

        Returns:
            변경 여부
        """
        old = self.get(region)
        if new == old:
            return False

        await notify(region.display_name, old, new)
        setattr(self, _field(region), new)
        return True


def _field(region: Region) -> str:
    return region.name.lower()
