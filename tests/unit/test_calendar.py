"""Unit tests for business-day arithmetic"""

import asyncio
import pytest
from datetime import date, timedelta
from radicados_gateway.domain.calendar import BusinessCalendar, StaticHolidaySource
from radicados_gateway.domain.exceptions import InvalidBusinessDayCountError
from radicados_gateway.domain.holidays import COLOMBIA_HOLIDAYS_2025
from radicados_gateway.domain.models import HolidayEntry
from tests.fakes import FakeHolidaySource


async def test_weekends_and_holidays_are_not_business_days(calendar: BusinessCalendar):
    assert await calendar.is_business_day(date(2025, 3, 3)) is True  # Monday
    assert await calendar.is_business_day(date(2025, 3, 8)) is False  # Saturday
    assert await calendar.is_business_day(date(2025, 3, 9)) is False  # Sunday
    assert await calendar.is_business_day(date(2025, 3, 24)) is False  # San José


async def test_is_holiday_uses_the_table(calendar: BusinessCalendar):
    assert await calendar.is_holiday(date(2025, 1, 6)) is True
    assert await calendar.is_holiday(date(2025, 1, 7)) is False


async def test_static_source_applies_rules_outside_the_table():
    calendar = BusinessCalendar(StaticHolidaySource.colombia())

    assert await calendar.is_holiday(date(2026, 1, 12)) is True
    assert await calendar.is_holiday(date(2026, 1, 6)) is False


async def test_count_is_half_open(calendar: BusinessCalendar):
    # Mon 3 Mar excluded, Tue to Fri counted
    assert await calendar.count_business_days(date(2025, 3, 3), date(2025, 3, 7)) == 4
    # Ending on a Monday includes it
    assert await calendar.count_business_days(date(2025, 3, 7), date(2025, 3, 10)) == 1


async def test_count_is_zero_for_empty_or_reversed_ranges(calendar: BusinessCalendar):
    assert await calendar.count_business_days(date(2025, 3, 5), date(2025, 3, 5)) == 0
    assert await calendar.count_business_days(date(2025, 3, 10), date(2025, 3, 5)) == 0


async def test_count_skips_holidays(calendar: BusinessCalendar):
    # Holy Thursday and Good Friday fall inside the range
    assert await calendar.count_business_days(date(2025, 4, 14), date(2025, 4, 21)) == 3


async def test_add_business_days_standard_window(calendar: BusinessCalendar):
    """Sixteen business days from Reyes Magos skip six weekend days"""
    assert await calendar.add_business_days(date(2025, 1, 6), 16) == date(2025, 1, 28)


async def test_add_business_days_without_holidays(calendar: BusinessCalendar):
    assert await calendar.add_business_days(date(2025, 2, 3), 16) == date(2025, 2, 25)


async def test_add_one_business_day_skips_weekend_and_holiday(calendar: BusinessCalendar):
    # Friday 3 January: weekend, then Monday 6 January holiday
    assert await calendar.add_business_days(date(2025, 1, 3), 1) == date(2025, 1, 7)
    # Wednesday of Holy Week
    assert await calendar.add_business_days(date(2025, 4, 16), 1) == date(2025, 4, 21)


async def test_add_business_days_crosses_year_boundary(calendar: BusinessCalendar):
    # 26 Dec 2025 (Fri) + 3: 29, 30, 31 Dec
    assert await calendar.add_business_days(date(2025, 12, 26), 3) == date(2025, 12, 31)
    # + 4: 1 Jan 2026 is a holiday, lands on Friday 2 Jan
    assert await calendar.add_business_days(date(2025, 12, 26), 4) == date(2026, 1, 2)


@pytest.mark.parametrize("count", [0, -3, 2.5, "5", None, True])
async def test_add_business_days_rejects_invalid_counts(calendar: BusinessCalendar, count):
    with pytest.raises(InvalidBusinessDayCountError):
        await calendar.add_business_days(date(2025, 3, 3), count)


async def test_invalid_count_is_a_value_error(calendar: BusinessCalendar):
    with pytest.raises(ValueError):
        await calendar.add_business_days(date(2025, 3, 3), 0)


async def test_projection_and_count_agree(calendar: BusinessCalendar):
    """Counting back over a projected range gives the requested days"""
    start = date(2025, 5, 28)
    for n in (1, 5, 10, 16, 30):
        deadline = await calendar.add_business_days(start, n)
        assert await calendar.count_business_days(start, deadline) == n
        assert await calendar.is_business_day(deadline)


async def test_business_days_until(calendar: BusinessCalendar, today: date):
    assert await calendar.business_days_until(date(2025, 3, 5), today) == 2
    assert await calendar.business_days_until(date(2025, 3, 25), today) == 15


async def test_business_days_until_is_zero_once_due(calendar: BusinessCalendar, today: date):
    assert await calendar.business_days_until(today, today) == 0
    assert await calendar.business_days_until(today - timedelta(days=10), today) == 0


async def test_each_year_is_loaded_once():
    source = FakeHolidaySource(COLOMBIA_HOLIDAYS_2025)
    calendar = BusinessCalendar(source)

    await calendar.count_business_days(date(2025, 1, 1), date(2025, 12, 31))
    await calendar.add_business_days(date(2025, 3, 3), 16)

    assert source.year_calls == [2025]


async def test_concurrent_evaluations_share_one_load():
    source = FakeHolidaySource(COLOMBIA_HOLIDAYS_2025)
    calendar = BusinessCalendar(source)

    await asyncio.gather(*(calendar.add_business_days(date(2025, 3, d), 5) for d in range(1, 20)))

    assert source.year_calls == [2025]


async def test_holiday_source_failure_fails_open():
    source = FakeHolidaySource(COLOMBIA_HOLIDAYS_2025, fail=True)
    calendar = BusinessCalendar(source)

    # 6 January counted as a business day while holidays are unavailable
    assert await calendar.add_business_days(date(2025, 1, 3), 1) == date(2025, 1, 6)
    assert await calendar.is_holiday(date(2025, 12, 25)) is False
    assert await calendar.holidays_for_year(2025) == []
    assert calendar.degraded is True


async def test_holiday_source_failure_still_skips_weekends():
    calendar = BusinessCalendar(FakeHolidaySource(fail=True))

    assert await calendar.count_business_days(date(2025, 3, 7), date(2025, 3, 10)) == 1


async def test_calendar_is_not_degraded_when_source_answers(calendar: BusinessCalendar):
    await calendar.count_business_days(date(2025, 1, 1), date(2025, 2, 1))

    assert calendar.degraded is False


async def test_custom_holiday_entries():
    calendar = BusinessCalendar(StaticHolidaySource([HolidayEntry(date(2025, 3, 4), "Día cívico")]))

    assert await calendar.count_business_days(date(2025, 3, 3), date(2025, 3, 7)) == 3
    # No rules: other years have no holidays
    assert await calendar.is_holiday(date(2026, 1, 1)) is False
