"""Convenience views over :class:`YearSignInRegister`.

Nothing here owns state: each helper delegates to the register's core
operations and only reshapes arguments or results (calendar triples in,
midnight ``datetime`` values out).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date, datetime, time

from signsheet.domain import calendar
from signsheet.domain.register import YearSignInRegister


def as_datetimes(days: Iterable[date]) -> list[datetime]:
    """Lift dates to ``datetime`` values at midnight."""
    return [datetime.combine(d, time.min) for d in days]


def is_signed_in_on(register: YearSignInRegister, year: int, month: int, day: int) -> bool:
    """``is_signed_in`` for a ``(year, month, day)`` triple.

    Uses calendar arithmetic rather than ``datetime.date``, so it answers
    for year 0 and negative years too. Raises ``ValueError`` for a triple
    that is not a real date.
    """
    index = calendar.day_of_year(year, month, day) - 1
    if year != register.year:
        return False
    return register.is_index_signed_in(index)


def sign_in_now(
    register: YearSignInRegister,
    *,
    clock: Callable[[], date] = date.today,
) -> date:
    """Sign in for the current local date and return it."""
    today = clock()
    register.sign_in_today(today)
    return today


def list_signed_in_datetimes(register: YearSignInRegister) -> list[datetime]:
    return as_datetimes(register.list_signed_in_days())


def list_not_signed_in_datetimes(register: YearSignInRegister) -> list[datetime]:
    return as_datetimes(register.list_not_signed_in_days())


def list_signed_in_datetimes_in_month(register: YearSignInRegister, month: int) -> list[datetime]:
    return as_datetimes(register.list_signed_in_days_in_month(month))


def list_not_signed_in_datetimes_in_month(
    register: YearSignInRegister, month: int
) -> list[datetime]:
    return as_datetimes(register.list_not_signed_in_days_in_month(month))
