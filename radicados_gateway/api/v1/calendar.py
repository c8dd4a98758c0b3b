"""Business-day calculator endpoints"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from radicados_gateway.api.v1.schemas import (
    BusinessDaysResponse,
    DeadlineResponse,
    HolidayCheckResponse,
    HolidaySchema,
    HolidaysResponse,
)
from radicados_gateway.api.dependencies import get_calendar, get_policy
from radicados_gateway.domain.calendar import BusinessCalendar
from radicados_gateway.domain.exceptions import InvalidBusinessDayCountError
from radicados_gateway.domain.models import DeadlinePolicy

router = APIRouter()

# Upper bounds keep a single calculation to a few years of day-by-day walking
MAX_PROJECTION_BUSINESS_DAYS = 1000
MAX_COUNT_SPAN_DAYS = 3660


@router.get("/calendar/business-days", response_model=BusinessDaysResponse)
async def count_business_days(
    start: date = Query(..., description="Excluded from the count"),
    end: date = Query(..., description="Included in the count"),
    calendar: BusinessCalendar = Depends(get_calendar),
):
    """Business days in (start, end]; 0 when end is not after start"""
    if (end - start).days > MAX_COUNT_SPAN_DAYS:
        raise HTTPException(status_code=422, detail=f"Range longer than {MAX_COUNT_SPAN_DAYS} days")

    business_days = await calendar.count_business_days(start, end)
    return BusinessDaysResponse(start=start, end=end, business_days=business_days)


@router.get("/calendar/deadline", response_model=DeadlineResponse)
async def project_deadline(
    start: date = Query(...),
    days: Optional[int] = Query(
        None,
        ge=1,
        le=MAX_PROJECTION_BUSINESS_DAYS,
        description="Business days to add; defaults to the response window",
    ),
    calendar: BusinessCalendar = Depends(get_calendar),
    policy: DeadlinePolicy = Depends(get_policy),
):
    business_days = policy.response_window if days is None else days
    try:
        deadline = await calendar.add_business_days(start, business_days)
    except InvalidBusinessDayCountError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except OverflowError:
        raise HTTPException(status_code=422, detail="Deadline falls outside the supported calendar")
    return DeadlineResponse(start=start, business_days=business_days, deadline=deadline)


@router.get("/calendar/holidays/check", response_model=HolidayCheckResponse)
async def check_holiday(
    day: date = Query(...),
    calendar: BusinessCalendar = Depends(get_calendar),
):
    is_holiday = await calendar.is_holiday(day)
    return HolidayCheckResponse(
        day=day,
        is_holiday=is_holiday,
        is_business_day=day.weekday() < 5 and not is_holiday,
    )


@router.get("/calendar/holidays/{year}", response_model=HolidaysResponse)
async def list_holidays(year: int, calendar: BusinessCalendar = Depends(get_calendar)):
    if not 1900 <= year <= 2200:
        raise HTTPException(status_code=400, detail="Year out of range")

    entries = await calendar.holidays_for_year(year)
    return HolidaysResponse(
        year=year,
        holidays=[HolidaySchema(day=e.day, name=e.name) for e in entries],
        degraded=calendar.degraded,
    )
