"""GET /v1/summary/monthly - Monthly intake dashboard"""

import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from radicados_gateway.api.v1.schemas import MonthlyItemSchema, MonthlySummaryResponse
from radicados_gateway.api.dependencies import get_calendar, get_document_store, get_policy, get_today
from radicados_gateway.domain.calendar import BusinessCalendar
from radicados_gateway.domain.exceptions import RecordStoreError
from radicados_gateway.domain.models import DeadlinePolicy
from radicados_gateway.domain.summary import build_monthly_summary

router = APIRouter()


@router.get("/summary/monthly", response_model=MonthlySummaryResponse)
async def get_monthly_summary(
    year: Optional[int] = Query(None, ge=1900, le=2200),
    month: Optional[int] = Query(None, ge=1, le=12),
    store=Depends(get_document_store),
    calendar: BusinessCalendar = Depends(get_calendar),
    policy: DeadlinePolicy = Depends(get_policy),
    today: date = Depends(get_today),
):
    """
    Counts for radicados received in a month (default: the current one).

    Returns:
        Month totals by state, overall pending count and intake channels
    """
    try:
        documents = await store.list_documents()
    except RecordStoreError as e:
        logging.error(f"Could not load radicados for summary: {e}")
        raise HTTPException(status_code=503, detail="No se pudo cargar el resumen")

    summary = await build_monthly_summary(
        documents,
        year or today.year,
        month or today.month,
        calendar,
        today,
        policy,
    )

    return MonthlySummaryResponse(
        year=summary.year,
        month=summary.month,
        total=summary.total,
        responded=summary.responded,
        pending=summary.pending,
        in_alert=summary.in_alert,
        pending_total=summary.pending_total,
        by_channel=summary.by_channel,
        items=[
            MonthlyItemSchema(
                id=item.id,
                number=item.number,
                topic=item.topic,
                intake_date=item.intake_date,
                state=item.state,
            )
            for item in summary.items
        ],
    )
