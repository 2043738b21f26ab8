"""Exception taxonomy for the domain layer.

Every error is raised to the immediate caller. The service layer maps
each class to a stable ``ServiceError.code`` via :attr:`SignSheetError.code`.
"""

from __future__ import annotations


class SignSheetError(Exception):
    """Base class for all sign-in sheet rule violations."""

    code = "SIGNSHEET_ERROR"


class InvalidLengthError(SignSheetError, ValueError):
    """A serialized record does not have the fixed record length."""

    code = "INVALID_LENGTH"

    def __init__(self, actual: int, expected: int) -> None:
        super().__init__(f"Expected a {expected}-byte record, got {actual} bytes")
        self.actual = actual
        self.expected = expected


class YearMismatchError(SignSheetError):
    """A sign-in was attempted for a date outside the register's year."""

    code = "YEAR_MISMATCH"

    def __init__(self, register_year: int, date_year: int) -> None:
        super().__init__(f"Cannot sign in on a {date_year} date in the {register_year} register")
        self.register_year = register_year
        self.date_year = date_year


class InvalidMonthError(SignSheetError, ValueError):
    """A month argument fell outside 1..12."""

    code = "INVALID_MONTH"

    def __init__(self, month: int) -> None:
        super().__init__(f"Month must be between 1 and 12, got {month}")
        self.month = month


class YearOutOfRangeError(SignSheetError, ValueError):
    """A year does not fit the signed 16-bit year field."""

    code = "YEAR_OUT_OF_RANGE"

    def __init__(self, year: int) -> None:
        super().__init__(f"Year {year} does not fit in a signed 16-bit field")
        self.year = year


class StrayBitsError(SignSheetError, ValueError):
    """A strict load found day bits set past the end of the year."""

    code = "STRAY_BITS"

    def __init__(self, year: int, indices: list[int]) -> None:
        super().__init__(
            f"Record for {year} has {len(indices)} bit(s) set beyond the last day of the year"
        )
        self.year = year
        self.indices = indices


class CalendarRangeError(SignSheetError, ValueError):
    """Dates cannot be materialized for a year outside ``datetime``'s range."""

    code = "CALENDAR_RANGE"

    def __init__(self, year: int) -> None:
        super().__init__(f"Year {year} cannot be represented as a calendar date")
        self.year = year
