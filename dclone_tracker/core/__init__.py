"""
Core domain models and pure functions for dclone-tracker.

This module contains the domain models and pure business logic
that are independent of external I/O and infrastructure concerns.
"""

from .errors import (
    TrackerError, ParseError, UnrecognizedRegion, InvalidProgressValue,
    FetchError, NotifierError,
)
from .models import Region, Urgency, ProgressRecord, NotificationEvent
from .parse import parse_record, parse_progress
from .severity import classify, build_event, format_body, display_name_for_code
from .status import RegionStatus

__all__ = [
    "TrackerError", "ParseError", "UnrecognizedRegion", "InvalidProgressValue",
    "FetchError", "NotifierError",
    "Region", "Urgency", "ProgressRecord", "NotificationEvent",
    "parse_record", "parse_progress",
    "classify", "build_event", "format_body", "display_name_for_code",
    "RegionStatus",
]
