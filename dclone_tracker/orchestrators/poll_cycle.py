"""
Poll cycle for dclone-tracker.

This module implements a single poll: fetch the status API once, parse
every record and apply it to the region status store, which notifies on
change. A bad record is logged and skipped without affecting the other
records of the same poll.
"""

from typing import List
from dclone_tracker.core.errors import (
    InvalidProgressValue, NotifierError, ParseError, UnrecognizedRegion,
)
from dclone_tracker.core.models import ProgressRecord
from dclone_tracker.core.parse import parse_progress, parse_record
from dclone_tracker.core.severity import classify, display_name_for_code
from dclone_tracker.core.status import RegionStatus
from dclone_tracker.dispatch.notifier import ChangeNotifier
from dclone_tracker.ports.ingest import ProgressIngestPort
from dclone_tracker.observability import metrics
from dclone_tracker.observability.logging_setup import get_logger

log = get_logger("dclone.poll")

class PollCycle:
    """폴링 1회 실행기"""

    def __init__(self,
                 source: ProgressIngestPort,
                 notifier: ChangeNotifier | None = None):
        """
        초기화합니다.

        Args:
            source: 진행도 수집 포트
            notifier: 변경 알림기 (one-shot 모드에서는 None)
        """
        self.source = source
        self.notifier = notifier

    async def _fetch(self) -> List[ProgressRecord]:
        try:
            with metrics.poll_seconds.time():
                records = await self.source.fetch()
        except Exception:
            metrics.polls_total.labels(result="error").inc()
            raise
        metrics.polls_total.labels(result="ok").inc()
        return records

    async def run(self, status: RegionStatus) -> int:
        """
        폴링을 1회 수행하고 변경 사항을 알립니다.

        Args:
            status: 지역 상태 저장소 (스케줄러 소유)

        Returns:
            변경된 지역 수

        Raises:
            FetchError: 조회 실패 (저장소는 변경되지 않음)
        """
        if self.notifier is None:
            raise RuntimeError("run() requires a notifier; use run_once() for one-shot mode")

        records = await self._fetch()
        changed = 0
        for record in records:
            if await self._apply(status, record):
                changed += 1
        return changed

    async def _apply(self, status: RegionStatus, record: ProgressRecord) -> bool:
        try:
            region, value = parse_record(record)
        except UnrecognizedRegion as e:
            log.warning(str(e))
            metrics.records_total.labels(outcome="unknown_region").inc()
            return False
        except ParseError as e:
            log.error(f"레코드 건너뜀: {e}")
            metrics.records_total.labels(outcome="invalid").inc()
            return False

        try:
            updated = await status.update(region, value, self.notifier.notify)
        except InvalidProgressValue as e:
            log.error(f"{region.display_name} 레코드 건너뜀: {e}")
            metrics.records_total.labels(outcome="invalid").inc()
            return False
        except NotifierError as e:
            # 저장 값은 그대로 두어 다음 폴링에서 다시 변경으로 감지됨
            log.error(f"{region.display_name} 알림 실패: {e}")
            metrics.records_total.labels(outcome="notify_failed").inc()
            return False

        metrics.records_total.labels(outcome="changed" if updated else "unchanged").inc()
        metrics.region_progress.labels(region=region.display_name).set(status.get(region))
        return updated

    async def run_once(self) -> List[ProgressRecord]:
        """
        one-shot 모드: 조회 후 모든 레코드를 분류해 로그로만 남깁니다.
        저장소와 알림은 사용하지 않습니다.
        """
        records = await self._fetch()
        for record in records:
            region_name = display_name_for_code(record.region)
            log.info(f"Progress for {region_name}: {record.progress}/6")
            try:
                title, urgency = classify(parse_progress(record.progress))
            except (ParseError, InvalidProgressValue) as e:
                log.warning(f"{region_name} 분류 불가: {e}")
                continue
            log.info(f"{region_name}: {title} (urgency:{urgency.value})")
        return records
