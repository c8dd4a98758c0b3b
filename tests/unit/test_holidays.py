"""Unit tests for the Colombian holiday rules"""

import pytest
from datetime import date
from radicados_gateway.domain.holidays import (
    COLOMBIA_HOLIDAYS_2025,
    colombian_holidays,
    easter_sunday,
    next_monday,
)


@pytest.mark.parametrize(
    "year,expected",
    [
        (2024, date(2024, 3, 31)),
        (2025, date(2025, 4, 20)),
        (2026, date(2026, 4, 5)),
        (2027, date(2027, 3, 28)),
    ],
)
def test_easter_sunday(year, expected):
    assert easter_sunday(year) == expected


def test_next_monday_keeps_mondays():
    assert next_monday(date(2025, 3, 24)) == date(2025, 3, 24)


def test_next_monday_moves_other_days():
    # Wednesday 19 March 2025
    assert next_monday(date(2025, 3, 19)) == date(2025, 3, 24)
    # Sunday 29 June 2025
    assert next_monday(date(2025, 6, 29)) == date(2025, 6, 30)


def test_rules_reproduce_embedded_2025_table():
    """Computed 2025 calendar matches the embedded table entry for entry"""
    assert colombian_holidays(2025) == COLOMBIA_HOLIDAYS_2025


def test_2025_shared_monday_is_a_single_entry():
    entries = [e for e in colombian_holidays(2025) if e.day == date(2025, 6, 30)]

    assert len(entries) == 1
    assert entries[0].name == "San Pedro y San Pablo / Sagrado Corazón de Jesús"


def test_2026_calendar():
    days = [e.day for e in colombian_holidays(2026)]

    assert days == [
        date(2026, 1, 1),
        date(2026, 1, 12),
        date(2026, 3, 23),
        date(2026, 4, 2),
        date(2026, 4, 3),
        date(2026, 5, 1),
        date(2026, 5, 18),
        date(2026, 6, 8),
        date(2026, 6, 15),
        date(2026, 6, 29),
        date(2026, 7, 20),
        date(2026, 8, 7),
        date(2026, 8, 17),
        date(2026, 10, 12),
        date(2026, 11, 2),
        date(2026, 11, 16),
        date(2026, 12, 8),
        date(2026, 12, 25),
    ]


def test_holy_week_is_not_moved():
    entries = {e.day: e.name for e in colombian_holidays(2025)}

    assert entries[date(2025, 4, 17)] == "Jueves Santo"
    assert entries[date(2025, 4, 18)] == "Viernes Santo"


def test_moved_holidays_always_fall_on_monday():
    moved = {"Día de los Reyes Magos", "Día de San José", "Ascensión del Señor", "Corpus Christi", "Día de la Raza"}
    for year in range(2020, 2031):
        for entry in colombian_holidays(year):
            if entry.name in moved:
                assert entry.day.weekday() == 0, (year, entry)
