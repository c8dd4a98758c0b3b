"""Deadline resolution and alert classification for pending documents"""

import asyncio
from collections import Counter
from datetime import date
from typing import List, Optional, Sequence, Tuple

from radicados_gateway.domain.calendar import BusinessCalendar
from radicados_gateway.domain.models import (
    AlertEvaluation,
    AlertLevel,
    AlertStatistics,
    DeadlinePolicy,
    DeadlineStatus,
    Document,
    DocumentAlert,
    FlagChanges,
)


def classify(remaining_business_days: int, policy: DeadlinePolicy) -> AlertLevel:
    """
    Map remaining business days to an alert tier.

    Tiers (default policy):
    - <= 3 (including overdue, <= 0): critical
    - 4 to 7: warning
    - 8 to 10: info
    - > 10: none, not shown as an alert
    """
    if remaining_business_days <= policy.critical_threshold:
        return AlertLevel.CRITICAL
    elif remaining_business_days <= policy.warning_threshold:
        return AlertLevel.WARNING
    elif remaining_business_days <= policy.alert_threshold:
        return AlertLevel.INFO
    else:
        return AlertLevel.NONE


async def resolve_deadline(
    document: Document,
    calendar: BusinessCalendar,
    policy: DeadlinePolicy,
) -> Tuple[Optional[date], bool]:
    """
    Deadline of a document and whether it was derived.

    An explicit deadline wins. Otherwise the standard response window is
    projected from the assignment date, or the intake date when the document
    was never assigned. Without any of them there is no deadline.
    """
    if document.deadline is not None:
        return document.deadline, False

    start = document.assignment_date or document.intake_date
    if start is None:
        return None, False

    return await calendar.add_business_days(start, policy.response_window), True


async def evaluate_document(
    document: Document,
    calendar: BusinessCalendar,
    today: date,
    policy: DeadlinePolicy,
) -> Optional[DeadlineStatus]:
    """Deadline status of a pending document; None when responded or without a deadline"""
    if document.responded:
        return None

    deadline, derived = await resolve_deadline(document, calendar, policy)
    if deadline is None:
        return None

    remaining = await calendar.business_days_until(deadline, today)
    return DeadlineStatus(
        document_id=document.id,
        deadline=deadline,
        derived=derived,
        remaining_business_days=remaining,
        level=classify(remaining, policy),
    )


async def evaluate_alerts(
    documents: Sequence[Document],
    calendar: BusinessCalendar,
    today: date,
    policy: DeadlinePolicy,
) -> AlertEvaluation:
    """
    Classify pending documents and work out which stored alert flags are stale.

    Responded documents are skipped entirely. Documents without a resolvable
    deadline are never in alert, so a stale true flag on them is cleared.
    """
    pending = [d for d in documents if not d.responded]
    statuses = await asyncio.gather(
        *(evaluate_document(d, calendar, today, policy) for d in pending)
    )

    alerts: List[DocumentAlert] = []
    statistics = AlertStatistics(total_pending=len(pending))
    changes = FlagChanges()

    for document, status in zip(pending, statuses):
        should_alert = status is not None and status.requires_attention

        if should_alert:
            alerts.append(DocumentAlert(document=document, status=status))
            if status.overdue:
                statistics.overdue += 1
            else:
                statistics.due_soon += 1

        if should_alert and not document.alert_flag:
            changes.to_true.append(document.id)
        elif not should_alert and document.alert_flag:
            changes.to_false.append(document.id)

    statistics.in_alert = statistics.overdue + statistics.due_soon
    alerts.sort(key=lambda a: (a.status.remaining_business_days, a.status.deadline))

    # "unresolved" counts pending documents without any deadline
    levels = Counter(s.level.value if s is not None else "unresolved" for s in statuses)

    return AlertEvaluation(alerts=alerts, statistics=statistics, flag_changes=changes, levels=dict(levels))
