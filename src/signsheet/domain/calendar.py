"""Proleptic Gregorian calendar helpers keyed by day-of-year index.

Arithmetic is pure integer math and works for any year, including the
negative and zero years a signed 16-bit field can hold. Only
:func:`date_from_index` needs ``datetime.date`` and is therefore limited
to ``MINYEAR..MAXYEAR``.

INVARIANT: day index ``i`` of *year* is ``date(year, 1, 1) + i days``.
"""

from __future__ import annotations

from datetime import MAXYEAR, MINYEAR, date, timedelta

from signsheet.domain.errors import CalendarRangeError, InvalidMonthError

MAX_YEAR_LENGTH = 366

_MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Divisible by 4, and either not by 100 or also by 400."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def year_length(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def check_month(month: int) -> int:
    """Return *month* unchanged, or raise :class:`InvalidMonthError`."""
    if not 1 <= month <= 12:
        raise InvalidMonthError(month)
    return month


def days_in_month(year: int, month: int) -> int:
    check_month(month)
    if month == 2 and is_leap_year(year):
        return 29
    return _MONTH_LENGTHS[month - 1]


def day_of_year(year: int, month: int, day: int) -> int:
    """1-based ordinal of *day* within *year* (Jan 1 is 1)."""
    if not 1 <= day <= days_in_month(year, month):
        msg = f"Day {day} is out of range for {year}-{month:02d}"
        raise ValueError(msg)
    return sum(days_in_month(year, m) for m in range(1, month)) + day


def month_day_range(year: int, month: int) -> tuple[int, int]:
    """Zero-based half-open index range ``[start, stop)`` covered by *month*.

    ``start`` is the index of the 1st of the month and ``stop`` is the
    1-based day-of-year of the month's last day.
    """
    start = day_of_year(year, month, 1) - 1
    return start, start + days_in_month(year, month)


def index_of(value: date) -> int:
    """Zero-based day-of-year index of a ``date`` (or ``datetime``)."""
    return value.timetuple().tm_yday - 1


def require_date_year(year: int) -> int:
    """Return *year* if ``datetime.date`` can represent it."""
    if not MINYEAR <= year <= MAXYEAR:
        raise CalendarRangeError(year)
    return year


def date_from_index(year: int, index: int) -> date:
    """Calendar date for day *index* of *year*."""
    require_date_year(year)
    if not 0 <= index < year_length(year):
        msg = f"Day index {index} is out of range for {year}"
        raise ValueError(msg)
    return date(year, 1, 1) + timedelta(days=index)
