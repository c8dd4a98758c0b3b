"""Alert endpoints - radicados overdue or close to their deadline"""

import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from radicados_gateway.api.v1.schemas import AlertItem, AlertsResponse, AlertStatisticsSchema, RadicadoResponse
from radicados_gateway.api.dependencies import get_calendar, get_document_store, get_policy, get_request_id, get_today
from radicados_gateway.domain.calendar import BusinessCalendar
from radicados_gateway.domain.exceptions import RecordStoreError
from radicados_gateway.domain.models import AlertEvaluation, DeadlinePolicy
from radicados_gateway.services.alerts import compute_alerts, refresh_alerts

router = APIRouter()


def _to_response(evaluation: AlertEvaluation, calendar: BusinessCalendar) -> AlertsResponse:
    stats = evaluation.statistics
    return AlertsResponse(
        statistics=AlertStatisticsSchema(
            overdue=stats.overdue,
            due_soon=stats.due_soon,
            in_alert=stats.in_alert,
            total_pending=stats.total_pending,
        ),
        alerts=[
            AlertItem(
                radicado=RadicadoResponse.from_domain(a.document, a.status),
                level=a.status.level,
                remaining_business_days=a.status.remaining_business_days,
                deadline=a.status.deadline,
                overdue=a.status.overdue,
            )
            for a in evaluation.alerts
        ],
        holidays_degraded=calendar.degraded,
    )


@router.get("/alerts", response_model=AlertsResponse)
async def get_alerts(
    store=Depends(get_document_store),
    calendar: BusinessCalendar = Depends(get_calendar),
    policy: DeadlinePolicy = Depends(get_policy),
    today: date = Depends(get_today),
):
    """Radicados requiring attention, computed without touching stored flags"""
    try:
        evaluation = await compute_alerts(store, calendar, today, policy)
    except RecordStoreError as e:
        logging.error(f"Could not load pending radicados: {e}")
        raise HTTPException(status_code=503, detail="No se pudieron cargar las alertas")

    return _to_response(evaluation, calendar)


@router.post("/alerts/refresh", response_model=AlertsResponse)
async def post_alerts_refresh(
    request: Request,
    store=Depends(get_document_store),
    calendar: BusinessCalendar = Depends(get_calendar),
    policy: DeadlinePolicy = Depends(get_policy),
    today: date = Depends(get_today),
):
    """
    Recompute alerts and sync the stored alerta flags.

    A failed flag write does not fail the request: the computed alerts are
    returned with flags_persisted=false and a notification for the user.
    """
    request_id = get_request_id(request)
    try:
        report = await refresh_alerts(store, calendar, today, policy, trigger="api", request_id=request_id)
    except RecordStoreError as e:
        logging.error(f"Could not load pending radicados: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="No se pudieron cargar las alertas")

    response = _to_response(report.evaluation, calendar)
    changes = report.evaluation.flag_changes
    response.flags_set = len(changes.to_true)
    response.flags_cleared = len(changes.to_false)
    response.flags_persisted = None if changes.empty else report.flags_persisted
    response.notifications = report.notifications
    return response
