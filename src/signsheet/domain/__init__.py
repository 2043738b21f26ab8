"""Domain layer: calendar arithmetic, bit storage, and the yearly register.

This layer depends only on the standard library.
It must never import from services, infrastructure, commands, or config.
"""

from signsheet.domain.errors import (
    CalendarRangeError,
    InvalidLengthError,
    InvalidMonthError,
    SignSheetError,
    StrayBitsError,
    YearMismatchError,
    YearOutOfRangeError,
)
from signsheet.domain.register import RECORD_LENGTH, YearSignInRegister

__all__ = [
    "RECORD_LENGTH",
    "CalendarRangeError",
    "InvalidLengthError",
    "InvalidMonthError",
    "SignSheetError",
    "StrayBitsError",
    "YearMismatchError",
    "YearOutOfRangeError",
    "YearSignInRegister",
]
