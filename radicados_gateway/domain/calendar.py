"""Business-day calendar: holiday lookup, counting and deadline projection"""

import asyncio
from datetime import date, timedelta
from typing import Dict, FrozenSet, Iterable, List, Optional, Protocol

from radicados_gateway.domain.exceptions import HolidaySourceUnavailableError, InvalidBusinessDayCountError
from radicados_gateway.domain.holidays import COLOMBIA_HOLIDAYS_2025, colombian_holidays
from radicados_gateway.domain.models import HolidayEntry
from radicados_gateway.infrastructure.observability.logging import log_holiday_source_degraded
from radicados_gateway.infrastructure.observability.metrics import holiday_lookup_failures_counter

WEEKEND = frozenset({5, 6})  # Saturday, Sunday


class HolidaySource(Protocol):
    """Reference data backend answering holiday questions for one jurisdiction"""

    name: str

    async def is_holiday(self, day: date) -> bool:
        ...

    async def holidays_for_year(self, year: int) -> List[HolidayEntry]:
        ...


class StaticHolidaySource:
    """Holiday source backed by an in-memory table"""

    name = "static"

    def __init__(self, entries: Iterable[HolidayEntry] = (), rules=None):
        self._by_year: Dict[int, Dict[date, HolidayEntry]] = {}
        for entry in entries:
            self._by_year.setdefault(entry.day.year, {})[entry.day] = entry
        self._rules = rules

    @classmethod
    def colombia(cls) -> "StaticHolidaySource":
        """Embedded 2025 table, Ley 51 de 1983 rules for any other year"""
        return cls(COLOMBIA_HOLIDAYS_2025, rules=colombian_holidays)

    def _year(self, year: int) -> Dict[date, HolidayEntry]:
        if year not in self._by_year and self._rules is not None:
            self._by_year[year] = {entry.day: entry for entry in self._rules(year)}
        return self._by_year.get(year, {})

    async def is_holiday(self, day: date) -> bool:
        return day in self._year(day.year)

    async def holidays_for_year(self, year: int) -> List[HolidayEntry]:
        return sorted(self._year(year).values(), key=lambda e: e.day)


class BusinessCalendar:
    """
    Business-day arithmetic over one holiday source.

    A calendar instance lives for one calculation (a request or a refresh
    pass). Each year's holidays are loaded from the source at most once and
    reused for every day of that year, so counting a long range costs one
    source call per year rather than one per day.

    Lookups fail open: when the source is unavailable the affected dates are
    treated as business days and the degradation is logged and counted.
    """

    def __init__(self, source: HolidaySource):
        self.source = source
        self._years: Dict[int, "asyncio.Future[FrozenSet[date]]"] = {}
        self.degraded = False

    async def _load_year(self, year: int) -> FrozenSet[date]:
        try:
            entries = await self.source.holidays_for_year(year)
        except HolidaySourceUnavailableError as e:
            self._record_degraded(str(e), year=year)
            return frozenset()
        return frozenset(entry.day for entry in entries)

    async def _holiday_dates(self, year: int) -> FrozenSet[date]:
        # Concurrent evaluations share one in-flight load per year
        if year not in self._years:
            self._years[year] = asyncio.ensure_future(self._load_year(year))
        return await self._years[year]

    def _record_degraded(self, error: str, year: Optional[int] = None, day: Optional[date] = None) -> None:
        self.degraded = True
        holiday_lookup_failures_counter.labels(source=self.source.name).inc()
        log_holiday_source_degraded(self.source.name, error, year=year, day=day)

    async def holidays_for_year(self, year: int) -> List[HolidayEntry]:
        """List a year's holidays; empty when the source is unavailable"""
        try:
            return await self.source.holidays_for_year(year)
        except HolidaySourceUnavailableError as e:
            self._record_degraded(str(e), year=year)
            return []

    async def is_holiday(self, day: date) -> bool:
        loaded = self._years.get(day.year)
        if loaded is not None:
            return day in await loaded

        try:
            return await self.source.is_holiday(day)
        except HolidaySourceUnavailableError as e:
            self._record_degraded(str(e), day=day)
            return False

    async def is_business_day(self, day: date) -> bool:
        if day.weekday() in WEEKEND:
            return False
        return day not in await self._holiday_dates(day.year)

    async def count_business_days(self, start: date, end: date) -> int:
        """Number of business days in the half-open interval (start, end]"""
        count = 0
        cursor = start
        while cursor < end:
            cursor += timedelta(days=1)
            if await self.is_business_day(cursor):
                count += 1
        return count

    async def add_business_days(self, start: date, business_days: int) -> date:
        """
        Advance from start until business_days business days have been counted.

        Raises:
            InvalidBusinessDayCountError: business_days is not a positive integer
        """
        if isinstance(business_days, bool) or not isinstance(business_days, int) or business_days <= 0:
            raise InvalidBusinessDayCountError(
                f"business_days must be a positive integer, got {business_days!r}"
            )

        cursor = start
        added = 0
        while added < business_days:
            cursor += timedelta(days=1)
            if await self.is_business_day(cursor):
                added += 1
        return cursor

    async def business_days_until(self, deadline: date, today: date) -> int:
        """Business days left before deadline; 0 once the deadline is today or past"""
        if deadline <= today:
            return 0
        return await self.count_business_days(today, deadline)
