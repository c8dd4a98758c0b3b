"""Colombian national holidays (Ley 51 de 1983)"""

from datetime import date, timedelta
from typing import Dict, List

from radicados_gateway.domain.models import HolidayEntry

# Holidays that always fall on their calendar date
FIXED_HOLIDAYS = [
    (1, 1, "Año Nuevo"),
    (5, 1, "Día del Trabajo"),
    (7, 20, "Día de la Independencia"),
    (8, 7, "Batalla de Boyacá"),
    (12, 8, "Inmaculada Concepción"),
    (12, 25, "Navidad"),
]

# Holidays moved to the following Monday when they fall on another weekday
MONDAY_HOLIDAYS = [
    (1, 6, "Día de los Reyes Magos"),
    (3, 19, "Día de San José"),
    (6, 29, "San Pedro y San Pablo"),
    (8, 15, "Asunción de la Virgen"),
    (10, 12, "Día de la Raza"),
    (11, 1, "Todos los Santos"),
    (11, 11, "Independencia de Cartagena"),
]

# Offsets from Easter Sunday; the last three also move to Monday
EASTER_HOLIDAYS = [
    (-3, "Jueves Santo", False),
    (-2, "Viernes Santo", False),
    (39, "Ascensión del Señor", True),
    (60, "Corpus Christi", True),
    (68, "Sagrado Corazón de Jesús", True),
]

COLOMBIA_HOLIDAYS_2025 = [
    HolidayEntry(date(2025, 1, 1), "Año Nuevo"),
    HolidayEntry(date(2025, 1, 6), "Día de los Reyes Magos"),
    HolidayEntry(date(2025, 3, 24), "Día de San José"),
    HolidayEntry(date(2025, 4, 17), "Jueves Santo"),
    HolidayEntry(date(2025, 4, 18), "Viernes Santo"),
    HolidayEntry(date(2025, 5, 1), "Día del Trabajo"),
    HolidayEntry(date(2025, 6, 2), "Ascensión del Señor"),
    HolidayEntry(date(2025, 6, 23), "Corpus Christi"),
    HolidayEntry(date(2025, 6, 30), "San Pedro y San Pablo / Sagrado Corazón de Jesús"),
    HolidayEntry(date(2025, 7, 20), "Día de la Independencia"),
    HolidayEntry(date(2025, 8, 7), "Batalla de Boyacá"),
    HolidayEntry(date(2025, 8, 18), "Asunción de la Virgen"),
    HolidayEntry(date(2025, 10, 13), "Día de la Raza"),
    HolidayEntry(date(2025, 11, 3), "Todos los Santos"),
    HolidayEntry(date(2025, 11, 17), "Independencia de Cartagena"),
    HolidayEntry(date(2025, 12, 8), "Inmaculada Concepción"),
    HolidayEntry(date(2025, 12, 25), "Navidad"),
]


def easter_sunday(year: int) -> date:
    """Gregorian Easter Sunday (anonymous Gregorian algorithm)"""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


def next_monday(day: date) -> date:
    """Return day itself if it is a Monday, otherwise the following Monday"""
    return day + timedelta(days=(7 - day.weekday()) % 7)


def colombian_holidays(year: int) -> List[HolidayEntry]:
    """
    Compute the national holiday calendar for a year.

    Two rules can land on the same Monday (2025-06-30 is both Sagrado Corazón
    and San Pedro y San Pablo); such dates produce a single entry with both
    names so there is at most one entry per date.
    """
    names: Dict[date, List[str]] = {}

    def add(day: date, name: str) -> None:
        names.setdefault(day, []).append(name)

    for month, day, name in FIXED_HOLIDAYS:
        add(date(year, month, day), name)

    for month, day, name in MONDAY_HOLIDAYS:
        add(next_monday(date(year, month, day)), name)

    easter = easter_sunday(year)
    for offset, name, moves in EASTER_HOLIDAYS:
        day = easter + timedelta(days=offset)
        add(next_monday(day) if moves else day, name)

    return [HolidayEntry(day=day, name=" / ".join(names[day])) for day in sorted(names)]
