"""
Progress record parsing for dclone-tracker.

Pure functions converting raw API records into (Region, value) pairs.
The value range is not checked here; see severity.classify.
"""

import re
from typing import Any, Tuple, Union
from .errors import ParseError
from .models import ProgressRecord, Region

# ASCII 부호와 숫자만 (int()는 공백, 밑줄, 유니코드 숫자도 허용함)
_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_progress(progress: str) -> int:
    """progress 문자열을 정수로 변환합니다. 정수가 아니면 ParseError."""
    if not isinstance(progress, str) or not _INTEGER.fullmatch(progress):
        raise ParseError(f"Invalid progress value: {progress!r}")
    return int(progress)


def parse_record(record: Union[ProgressRecord, Any]) -> Tuple[Region, int]:
    """
    레코드를 (Region, 진행도) 쌍으로 변환합니다.

    Args:
        record: ProgressRecord 또는 원시 JSON 객체

    Returns:
        (지역, 정수 진행도)

    Raises:
        UnrecognizedRegion: 지역 코드가 1/2/3이 아님
        ParseError: progress가 정수가 아니거나 레코드 형식 오류
    """
    if not isinstance(record, ProgressRecord):
        record = ProgressRecord.from_raw(record)

    # 지역을 먼저 확인 (알 수 없는 지역은 값과 무관하게 건너뜀)
    region = Region.from_code(record.region)
    return region, parse_progress(record.progress)
