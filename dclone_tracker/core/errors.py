"""
Error types for dclone-tracker.

All errors raised by the core and adapters derive from TrackerError
so that the polling loop can tell expected failures apart from bugs.
"""


class TrackerError(Exception):
    """dclone-tracker 공통 예외"""


class ParseError(TrackerError):
    """진행도 레코드를 해석할 수 없음 (정수가 아닌 progress 등)"""


class UnrecognizedRegion(TrackerError):
    """알 수 없는 지역 코드"""

    def __init__(self, code: str):
        super().__init__(f"Unexpected region code: {code}")
        self.code = code


class InvalidProgressValue(TrackerError):
    """분류 범위(1~6)를 벗어난 진행도 값"""

    def __init__(self, value: int):
        super().__init__(f"Unknown progress value: {value}")
        self.value = value


class FetchError(TrackerError):
    """상태 API 조회 실패 (네트워크, HTTP 상태, JSON 디코딩)"""


class NotifierError(TrackerError):
    """알림 싱크 초기화 또는 발송 실패"""
