"""
Metrics definitions for dclone-tracker.

This module defines Prometheus metrics for monitoring
the poll/diff/notify loop.
"""

from prometheus_client import Counter, Histogram, Gauge

# 카운터 메트릭
polls_total = Counter(
    "dclone_polls_total",
    "Number of status API polls",
    ["result"]          # ok | error
)

records_total = Counter(
    "dclone_records_total",
    "Number of progress records processed",
    ["outcome"]         # changed | unchanged | unknown_region | invalid | notify_failed
)

notifications_total = Counter(
    "dclone_notifications_total",
    "Number of desktop notifications sent",
    ["region", "urgency"]
)

# 히스토그램 메트릭
poll_seconds = Histogram(
    "dclone_poll_duration_seconds",
    "Time spent fetching the status API",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0]
)

# 게이지 메트릭
region_progress = Gauge(
    "dclone_region_progress",
    "Last applied progress value per region (0 = unobserved)",
    ["region"]
)

uptime_seconds = Gauge(
    "uptime_seconds",
    "Service uptime in seconds"
)
