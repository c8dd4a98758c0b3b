"""Alert refresh: classify pending radicados and sync their stored alert flags.

The classification is computed in memory first; persisting the flags is a
second step whose failure is reported but never changes the computed alerts.
"""
import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Awaitable, Callable, List, Optional

from radicados_gateway.domain.alerts import evaluate_alerts
from radicados_gateway.domain.calendar import BusinessCalendar
from radicados_gateway.domain.exceptions import RecordStoreError
from radicados_gateway.domain.models import AlertEvaluation, DeadlinePolicy
from radicados_gateway.domain.store import DocumentStore
from radicados_gateway.infrastructure.observability.logging import log_alert_refresh, log_flag_sync_failure
from radicados_gateway.infrastructure.observability.metrics import (
    alert_refresh_counter,
    flag_sync_failure_counter,
    record_alert_levels,
)

logger = logging.getLogger(__name__)

FLAG_SYNC_FAILED_NOTICE = "No se pudieron actualizar las alertas"


@dataclass
class AlertReport:
    evaluation: AlertEvaluation
    flags_persisted: bool = True
    notifications: List[str] = field(default_factory=list)


async def compute_alerts(store: DocumentStore, calendar: BusinessCalendar, today: date, policy: DeadlinePolicy) -> AlertEvaluation:
    """Classify pending radicados without writing anything back"""
    documents = await store.list_pending()
    return await evaluate_alerts(documents, calendar, today, policy)


async def refresh_alerts(
    store: DocumentStore,
    calendar: BusinessCalendar,
    today: date,
    policy: DeadlinePolicy,
    trigger: str = "api",
    request_id: Optional[str] = None,
) -> AlertReport:
    """
    Classify pending radicados and persist alert flags that changed.

    Flag writes are two batched updates, one per target value. A failed write
    is logged, counted and reported through notifications; the computed
    evaluation is returned regardless.

    Raises:
        RecordStoreError: pending radicados could not be read
    """
    start_time = time.time()
    alert_refresh_counter.labels(trigger=trigger).inc()

    evaluation = await compute_alerts(store, calendar, today, policy)
    record_alert_levels(evaluation.levels)
    report = AlertReport(evaluation=evaluation)

    changes = evaluation.flag_changes
    for ids, value in ((changes.to_true, True), (changes.to_false, False)):
        if not ids:
            continue
        try:
            await store.set_alert_flags(ids, value)
        except RecordStoreError as e:
            flag_sync_failure_counter.inc()
            log_flag_sync_failure(ids, value, str(e), request_id=request_id)
            report.flags_persisted = False

    if not report.flags_persisted:
        report.notifications.append(FLAG_SYNC_FAILED_NOTICE)

    duration_ms = (time.time() - start_time) * 1000
    log_alert_refresh(
        total_pending=evaluation.statistics.total_pending,
        in_alert=evaluation.statistics.in_alert,
        flags_set=len(changes.to_true),
        flags_cleared=len(changes.to_false),
        flags_persisted=report.flags_persisted,
        duration_ms=duration_ms,
        request_id=request_id,
    )
    return report


class AlertRefresher:
    """Runs an alert refresh every interval until stopped"""

    def __init__(self, run_once: Callable[[], Awaitable[object]], interval_seconds: float):
        self.run_once = run_once
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        """Cancel the loop and wait for it, so no timer outlives its owner"""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _loop(self) -> None:
        while True:
            try:
                await self.run_once()
            except RecordStoreError as e:
                logger.error("Scheduled alert refresh failed: %s", e)
            except Exception:
                # The loop outlives any single failed pass
                logger.exception("Scheduled alert refresh crashed")
            await asyncio.sleep(self.interval_seconds)
