"""YearSignInRegister: one calendar year of sign-ins, one bit per day.

Record layout (48 bytes, fixed for every year)::

    offset  length  field
    0       2       year, signed 16-bit little-endian
    2       46      day bits, bit i = byte i // 8, bit i % 8 (LSB first)

The register stores only dates, never times. Storage capacity is always
366 bits; bits past the year's last day are never set by any operation
and are cleared (or rejected) when a record is loaded.

Mutation is strict and queries are lenient: :meth:`sign_in_today`
raises on a date from another year, :meth:`is_signed_in` answers False.
"""

from __future__ import annotations

from datetime import date

from signsheet.domain import calendar
from signsheet.domain.bits import CAPACITY_BYTES, DayBits
from signsheet.domain.endian import SHORT_BYTES, bytes_to_short, short_to_bytes
from signsheet.domain.errors import (
    InvalidLengthError,
    StrayBitsError,
    YearMismatchError,
    YearOutOfRangeError,
)

YEAR_MIN = -(1 << 15)
YEAR_MAX = (1 << 15) - 1
RECORD_LENGTH = SHORT_BYTES + CAPACITY_BYTES


class YearSignInRegister:
    """Sign-in record for a single calendar year.

    Build one with :meth:`fresh` or :meth:`from_bytes`; the constructor
    takes ownership of *days*.
    """

    __slots__ = ("_days", "_year", "_year_length")

    def __init__(self, year: int, days: DayBits | None = None) -> None:
        if not YEAR_MIN <= year <= YEAR_MAX:
            raise YearOutOfRangeError(year)
        self._year = year
        self._year_length = calendar.year_length(year)
        self._days = days if days is not None else DayBits()

    # ------------------------------------------------------------------
    # Construction and codec
    # ------------------------------------------------------------------

    @classmethod
    def fresh(cls, year: int) -> YearSignInRegister:
        """An empty register for *year*."""
        return cls(year)

    @classmethod
    def from_bytes(cls, data: bytes, *, strict: bool = False) -> YearSignInRegister:
        """Decode a 48-byte record.

        Bits set beyond the last day of the decoded year are cleared, or
        rejected with :class:`StrayBitsError` when *strict* is True.

        Raises:
            InvalidLengthError: If *data* is not exactly 48 bytes.
        """
        if len(data) != RECORD_LENGTH:
            raise InvalidLengthError(len(data), RECORD_LENGTH)

        year = bytes_to_short(data)
        days = DayBits(bytes(data[SHORT_BYTES:]))
        stop = calendar.year_length(year)
        if strict:
            stray = days.set_from(stop)
            if stray:
                raise StrayBitsError(year, stray)
        else:
            days.clear_from(stop)
        return cls(year, days)

    def to_bytes(self) -> bytes:
        """Encode as the fixed 48-byte record."""
        return short_to_bytes(self._year) + self._days.to_bytes()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def year(self) -> int:
        return self._year

    @property
    def year_length(self) -> int:
        """365 or 366."""
        return self._year_length

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def sign_in_today(self, today: date) -> None:
        """Mark *today* as signed in. Signing in twice is a no-op.

        Raises:
            YearMismatchError: If *today* is not in this register's year.
        """
        if today.year != self._year:
            raise YearMismatchError(self._year, today.year)
        self._days.set(calendar.index_of(today))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_signed_in(self, day: date) -> bool:
        if day.year != self._year:
            return False
        return self._days.get(calendar.index_of(day))

    def is_index_signed_in(self, index: int) -> bool:
        """Bit for zero-based day *index*, usable for years ``date`` cannot hold."""
        if not 0 <= index < self._year_length:
            msg = f"Day index {index} is out of range for {self._year}"
            raise IndexError(msg)
        return self._days.get(index)

    def count_sign_in_days(self) -> int:
        return self._days.count(0, self._year_length)

    def count_not_sign_in_days(self) -> int:
        return self._year_length - self.count_sign_in_days()

    def count_sign_in_days_in_month(self, month: int) -> int:
        start, stop = calendar.month_day_range(self._year, month)
        return self._days.count(start, stop)

    def count_not_sign_in_days_in_month(self, month: int) -> int:
        return calendar.days_in_month(self._year, month) - self.count_sign_in_days_in_month(month)

    def list_signed_in_days(self) -> list[date]:
        return self._dates(0, self._year_length, signed=True)

    def list_not_signed_in_days(self) -> list[date]:
        return self._dates(0, self._year_length, signed=False)

    def list_signed_in_days_in_month(self, month: int) -> list[date]:
        start, stop = calendar.month_day_range(self._year, month)
        return self._dates(start, stop, signed=True)

    def list_not_signed_in_days_in_month(self, month: int) -> list[date]:
        start, stop = calendar.month_day_range(self._year, month)
        return self._dates(start, stop, signed=False)

    def _dates(self, start: int, stop: int, *, signed: bool) -> list[date]:
        calendar.require_date_year(self._year)
        return [
            calendar.date_from_index(self._year, i)
            for i in self._days.indices(start, stop, value=signed)
        ]

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, YearSignInRegister):
            return NotImplemented
        return self._year == other._year and self._days == other._days

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"YearSignInRegister(year={self._year}, "
            f"signed_in={self.count_sign_in_days()}/{self._year_length})"
        )
