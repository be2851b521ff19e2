"""
Core domain models for dclone-tracker.

This module defines the core domain models using Pydantic v2
for type safety and validation.
"""

from enum import Enum
from typing import Any, Dict
from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ParseError, UnrecognizedRegion


class Region(str, Enum):
    """추적 대상 지역 (고정 3개)"""
    AMERICAS = "Americas"
    EUROPE = "Europe"
    ASIA = "Asia"

    @classmethod
    def from_code(cls, code: str) -> "Region":
        """
        API 지역 코드를 Region으로 변환합니다.

        Args:
            code: "1" | "2" | "3"

        Raises:
            UnrecognizedRegion: 그 외의 코드
        """
        try:
            return REGION_CODES[code]
        except (KeyError, TypeError):
            raise UnrecognizedRegion(code) from None

    @property
    def display_name(self) -> str:
        return self.value


REGION_CODES: Dict[str, Region] = {
    "1": Region.AMERICAS,
    "2": Region.EUROPE,
    "3": Region.ASIA,
}


class Urgency(str, Enum):
    """알림 긴급도"""
    LOW = "low"
    NORMAL = "normal"
    CRITICAL = "critical"


class ProgressRecord(BaseModel):
    """API 응답의 지역별 진행도 레코드"""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    region: str
    progress: str

    @classmethod
    def from_raw(cls, raw: Any) -> "ProgressRecord":
        """JSON 객체를 레코드로 검증합니다. 실패 시 ParseError."""
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise ParseError(f"Malformed progress record: {raw!r}") from e


class NotificationEvent(BaseModel):
    """변경 감지 시 한 번 만들어져 알림 싱크로 전달되는 이벤트"""
    region_name: str
    old_value: int
    new_value: int
    title: str
    urgency: Urgency
    body: str
