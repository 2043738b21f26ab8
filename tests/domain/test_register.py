"""Tests for YearSignInRegister: sign-in, queries, and the 48-byte record."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from signsheet.domain import RECORD_LENGTH, YearSignInRegister
from signsheet.domain.calendar import date_from_index, days_in_month, year_length
from signsheet.domain.errors import (
    CalendarRangeError,
    InvalidLengthError,
    InvalidMonthError,
    SignSheetError,
    StrayBitsError,
    YearMismatchError,
    YearOutOfRangeError,
)


def _record(year_bytes: bytes, **bytes_at: int) -> bytes:
    """A 48-byte record with the given year prefix and day-byte overrides."""
    days = bytearray(46)
    for key, value in bytes_at.items():
        days[int(key.removeprefix("b"))] = value
    return year_bytes + bytes(days)


class TestFresh:
    def test_empty_register(self) -> None:
        reg = YearSignInRegister.fresh(2023)
        assert reg.year == 2023
        assert reg.year_length == 365
        assert reg.count_sign_in_days() == 0
        assert reg.count_not_sign_in_days() == 365

    def test_leap_year_length(self) -> None:
        assert YearSignInRegister.fresh(2024).year_length == 366

    def test_record_length_constant(self) -> None:
        assert RECORD_LENGTH == 48
        assert len(YearSignInRegister.fresh(2023).to_bytes()) == 48

    @pytest.mark.parametrize("year", [-32769, 32768, 100_000])
    def test_year_out_of_range(self, year: int) -> None:
        with pytest.raises(YearOutOfRangeError) as exc_info:
            YearSignInRegister.fresh(year)
        assert exc_info.value.year == year

    def test_repr(self) -> None:
        assert "2024" in repr(YearSignInRegister.fresh(2024))


class TestSignIn:
    def test_sign_in_mid_march(self) -> None:
        reg = YearSignInRegister.fresh(2023)
        reg.sign_in_today(date(2023, 3, 15))
        assert reg.is_signed_in(date(2023, 3, 15))
        assert not reg.is_signed_in(date(2023, 3, 14))
        assert reg.count_sign_in_days() == 1
        # day 74 of the year is bit 73: byte 9, bit 1
        assert reg.to_bytes()[2 + 9] == 0b0000_0010

    def test_sign_in_is_idempotent(self) -> None:
        reg = YearSignInRegister.fresh(2024)
        reg.sign_in_today(date(2024, 6, 1))
        before = reg.to_bytes()
        reg.sign_in_today(date(2024, 6, 1))
        assert reg.to_bytes() == before
        assert reg.count_sign_in_days() == 1

    def test_leap_day(self) -> None:
        reg = YearSignInRegister.fresh(2024)
        reg.sign_in_today(date(2024, 2, 29))
        assert reg.is_signed_in(date(2024, 2, 29))
        assert reg.count_sign_in_days_in_month(2) == 1
        assert reg.list_signed_in_days() == [date(2024, 2, 29)]

    def test_last_day_of_leap_year(self) -> None:
        reg = YearSignInRegister.fresh(2024)
        reg.sign_in_today(date(2024, 12, 31))
        assert reg.list_signed_in_days_in_month(12) == [date(2024, 12, 31)]

    def test_datetime_accepted(self) -> None:
        reg = YearSignInRegister.fresh(2024)
        reg.sign_in_today(datetime(2024, 3, 1, 23, 59))
        assert reg.is_signed_in(date(2024, 3, 1))
        assert reg.is_signed_in(datetime(2024, 3, 1, 0, 0))

    def test_wrong_year_raises_and_leaves_register_unchanged(self) -> None:
        reg = YearSignInRegister.fresh(2024)
        reg.sign_in_today(date(2024, 1, 1))
        before = reg.to_bytes()
        with pytest.raises(YearMismatchError) as exc_info:
            reg.sign_in_today(date(2023, 12, 31))
        assert exc_info.value.register_year == 2024
        assert exc_info.value.date_year == 2023
        assert reg.to_bytes() == before

    def test_mismatch_is_a_sign_sheet_error(self) -> None:
        reg = YearSignInRegister.fresh(2024)
        with pytest.raises(SignSheetError):
            reg.sign_in_today(date(2025, 1, 1))


class TestQueries:
    @pytest.fixture
    def reg(self) -> YearSignInRegister:
        r = YearSignInRegister.fresh(2024)
        for d in (date(2024, 1, 1), date(2024, 1, 31), date(2024, 2, 1), date(2024, 2, 29)):
            r.sign_in_today(d)
        return r

    def test_other_year_is_not_signed_in(self, reg: YearSignInRegister) -> None:
        assert reg.is_signed_in(date(2023, 1, 1)) is False
        assert reg.is_signed_in(date(2025, 1, 1)) is False

    def test_month_counts(self, reg: YearSignInRegister) -> None:
        assert reg.count_sign_in_days_in_month(1) == 2
        assert reg.count_not_sign_in_days_in_month(1) == 29
        assert reg.count_sign_in_days_in_month(2) == 2
        assert reg.count_not_sign_in_days_in_month(2) == 27
        assert reg.count_sign_in_days_in_month(3) == 0

    def test_month_counts_sum_to_year(self, reg: YearSignInRegister) -> None:
        assert sum(reg.count_sign_in_days_in_month(m) for m in range(1, 13)) == 4
        assert sum(reg.count_not_sign_in_days_in_month(m) for m in range(1, 13)) == 362

    def test_lists_are_sorted_and_partition_the_year(self, reg: YearSignInRegister) -> None:
        signed = reg.list_signed_in_days()
        missed = reg.list_not_signed_in_days()
        assert signed == sorted(signed)
        assert missed == sorted(missed)
        assert len(signed) == reg.count_sign_in_days() == 4
        assert len(missed) == reg.count_not_sign_in_days() == 362
        assert not set(signed) & set(missed)
        everything = {date(2024, 1, 1) + timedelta(days=i) for i in range(366)}
        assert set(signed) | set(missed) == everything

    def test_month_lists(self, reg: YearSignInRegister) -> None:
        assert reg.list_signed_in_days_in_month(1) == [date(2024, 1, 1), date(2024, 1, 31)]
        missed = reg.list_not_signed_in_days_in_month(2)
        assert len(missed) == 27
        assert date(2024, 2, 1) not in missed
        assert all(d.month == 2 for d in missed)

    @pytest.mark.parametrize("month", [0, 13])
    def test_invalid_month(self, reg: YearSignInRegister, month: int) -> None:
        with pytest.raises(InvalidMonthError):
            reg.count_sign_in_days_in_month(month)
        with pytest.raises(InvalidMonthError):
            reg.list_not_signed_in_days_in_month(month)

    def test_common_year_has_no_december_32nd(self) -> None:
        reg = YearSignInRegister.fresh(2023)
        assert len(reg.list_not_signed_in_days()) == 365
        assert reg.list_not_signed_in_days()[-1] == date(2023, 12, 31)


class TestRecordCodec:
    def test_layout(self) -> None:
        reg = YearSignInRegister.fresh(2024)
        reg.sign_in_today(date(2024, 1, 1))
        reg.sign_in_today(date(2024, 1, 10))
        assert reg.to_bytes() == _record(b"\xe8\x07", b0=0b0000_0001, b1=0b0000_0010)

    def test_round_trip(self) -> None:
        reg = YearSignInRegister.fresh(2024)
        for d in (date(2024, 3, 15), date(2024, 2, 29), date(2024, 12, 31)):
            reg.sign_in_today(d)
        restored = YearSignInRegister.from_bytes(reg.to_bytes())
        assert restored == reg
        assert restored.list_signed_in_days() == reg.list_signed_in_days()

    @pytest.mark.parametrize("year", [-32768, -1, 0, 1, 9999, 32767])
    def test_year_extremes_round_trip(self, year: int) -> None:
        data = YearSignInRegister.fresh(year).to_bytes()
        assert len(data) == 48
        assert YearSignInRegister.from_bytes(data).year == year

    def test_negative_year_encoding(self) -> None:
        assert YearSignInRegister.fresh(-1).to_bytes()[:2] == b"\xff\xff"

    @pytest.mark.parametrize("length", [0, 47, 49])
    def test_invalid_length(self, length: int) -> None:
        with pytest.raises(InvalidLengthError) as exc_info:
            YearSignInRegister.from_bytes(bytes(length))
        assert exc_info.value.actual == length
        assert exc_info.value.expected == 48

    def test_accepts_bytearray_and_memoryview(self) -> None:
        data = YearSignInRegister.fresh(2024).to_bytes()
        assert YearSignInRegister.from_bytes(bytearray(data)).year == 2024
        assert YearSignInRegister.from_bytes(memoryview(data)).year == 2024

    def test_stray_bit_is_cleared_on_load(self) -> None:
        # bit 365 (a 366th day) in a 365-day year: byte 45, bit 5
        data = _record(b"\xe7\x07", b0=0b1, b45=0b0010_0000)
        reg = YearSignInRegister.from_bytes(data)
        assert reg.year == 2023
        assert reg.count_sign_in_days() == 1
        assert reg.to_bytes() == _record(b"\xe7\x07", b0=0b1)

    def test_stray_bit_rejected_when_strict(self) -> None:
        data = _record(b"\xe7\x07", b45=0b0110_0000)
        with pytest.raises(StrayBitsError) as exc_info:
            YearSignInRegister.from_bytes(data, strict=True)
        assert exc_info.value.indices == [365, 366]
        assert exc_info.value.code == "STRAY_BITS"

    def test_padding_bits_past_capacity_are_cleared(self) -> None:
        # bits 366..367 sit in the last byte but beyond the 366-bit capacity
        data = _record(b"\xe8\x07", b45=0b1100_0000)
        reg = YearSignInRegister.from_bytes(data)
        assert reg.count_sign_in_days() == 0
        assert reg.to_bytes()[-1] == 0

    def test_leap_day_bit_is_kept_in_leap_year(self) -> None:
        data = _record(b"\xe8\x07", b45=0b0010_0000)
        reg = YearSignInRegister.from_bytes(data, strict=True)
        assert reg.list_signed_in_days() == [date(2024, 12, 31)]


class TestYearsOutsideDateRange:
    def test_counts_work_for_year_zero(self) -> None:
        reg = YearSignInRegister.fresh(0)
        assert reg.year_length == 366
        assert reg.count_not_sign_in_days() == 366
        assert reg.count_sign_in_days_in_month(2) == 0

    def test_listing_raises_calendar_range_error(self) -> None:
        reg = YearSignInRegister.fresh(-500)
        with pytest.raises(CalendarRangeError):
            reg.list_not_signed_in_days()

    def test_is_signed_in_with_python_dates(self) -> None:
        reg = YearSignInRegister.fresh(32767)
        assert reg.is_signed_in(date(2024, 1, 1)) is False


class TestEquality:
    def test_same_year_same_bits(self) -> None:
        a, b = YearSignInRegister.fresh(2024), YearSignInRegister.fresh(2024)
        a.sign_in_today(date(2024, 5, 5))
        b.sign_in_today(date(2024, 5, 5))
        assert a == b

    def test_different_year(self) -> None:
        assert YearSignInRegister.fresh(2024) != YearSignInRegister.fresh(2023)


class TestIndexQuery:
    def test_matches_date_query(self) -> None:
        reg = YearSignInRegister.fresh(2024)
        reg.sign_in_today(date(2024, 3, 15))
        assert reg.is_index_signed_in(74) is True
        assert reg.is_index_signed_in(73) is False

    def test_year_outside_date_range(self) -> None:
        assert YearSignInRegister.fresh(-1).is_index_signed_in(364) is False

    @pytest.mark.parametrize(("year", "index"), [(2023, 365), (2024, 366), (2024, -1)])
    def test_past_year_end(self, year: int, index: int) -> None:
        with pytest.raises(IndexError):
            YearSignInRegister.fresh(year).is_index_signed_in(index)


@pytest.mark.parametrize("year", [2023, 2024, 1900, 2000])
class TestWholeYear:
    def test_every_day_sets_exactly_its_bit(self, year: int) -> None:
        reg = YearSignInRegister.fresh(year)
        for index in range(year_length(year)):
            day = date_from_index(year, index)
            assert not reg.is_signed_in(day)
            reg.sign_in_today(day)
            assert reg.is_signed_in(day)
            assert reg.count_sign_in_days() == index + 1
            reg.sign_in_today(day)
            assert reg.count_sign_in_days() == index + 1
        assert reg.count_not_sign_in_days() == 0
        assert YearSignInRegister.from_bytes(reg.to_bytes()) == reg

    def test_month_counts_partition_each_month(self, year: int) -> None:
        reg = YearSignInRegister.fresh(year)
        for index in range(0, year_length(year), 3):
            reg.sign_in_today(date_from_index(year, index))
        for month in range(1, 13):
            signed = reg.count_sign_in_days_in_month(month)
            missed = reg.count_not_sign_in_days_in_month(month)
            assert signed + missed == days_in_month(year, month)
            assert signed == len(reg.list_signed_in_days_in_month(month))
            assert missed == len(reg.list_not_signed_in_days_in_month(month))
        total = reg.count_sign_in_days() + reg.count_not_sign_in_days()
        assert total == year_length(year)
