"""SheetService — stored sign-in registers, per owner and year.

Mutations load, change, and save a register inside one transaction so a
failure leaves the stored record untouched. Domain errors become failed
results with the error's code; nothing is raised to the caller.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING, Any

import structlog

from signsheet.domain.errors import SignSheetError
from signsheet.domain.register import YearSignInRegister
from signsheet.services.base import BaseService
from signsheet.services.result import ServiceResult, failure
from signsheet.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from signsheet.infrastructure.store import SheetStore

log = structlog.get_logger(__name__)


class SheetService(BaseService):
    """Create, sign in, query, and transfer registers."""

    def __init__(self, store: SheetStore, *, clock: Callable[[], date] = date.today) -> None:
        super().__init__(store)
        self._clock = clock

    @property
    def _strict(self) -> bool:
        return self._store.settings.sheet.strict_load

    def _format(self, day: date) -> str:
        return day.strftime(self._store.settings.output.date_format)

    def _not_found(self, op: str, owner: str, year: int) -> ServiceResult:
        return failure(
            op,
            "NOT_FOUND",
            f"No register for owner {owner!r} in {year}",
            owner=owner,
            year=year,
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @traced
    def create(self, year: int, *, owner: str | None = None) -> ServiceResult:
        """Store an empty register for *year*."""
        op = "create_sheet"
        owner = self._owner(owner)
        try:
            register = YearSignInRegister.fresh(year)
            with self._store.transaction() as repo:
                if repo.exists(owner, year):
                    return failure(
                        op,
                        "SHEET_EXISTS",
                        f"A register for owner {owner!r} in {year} already exists",
                        owner=owner,
                        year=year,
                    )
                repo.save(owner, register)
        except SignSheetError as exc:
            return self._domain_failure(op, exc)

        log.info("sheet.created", owner=owner, year=year)
        return ServiceResult(
            ok=True,
            op=op,
            data={"owner": owner, "year": year, "days": register.year_length},
        )

    @traced
    def sign_in(
        self,
        *,
        owner: str | None = None,
        on: date | None = None,
        year: int | None = None,
    ) -> ServiceResult:
        """Sign in on *on* (default: today) in the register for *year*.

        *year* defaults to the year of *on*. Passing a different year is
        a request against that year's register and fails with
        ``YEAR_MISMATCH``. A missing register is created when
        ``[sheet] auto_create`` is on.
        """
        op = "sign_in"
        owner = self._owner(owner)
        on = on or self._clock()
        target_year = on.year if year is None else year
        warnings: list[str] = []
        try:
            with self._store.transaction() as repo:
                register = repo.get(owner, target_year, strict=self._strict)
                created = register is None
                if register is None:
                    if not self._store.settings.sheet.auto_create:
                        return self._not_found(op, owner, target_year)
                    register = YearSignInRegister.fresh(target_year)
                already = register.is_signed_in(on)
                register.sign_in_today(on)
                repo.save(owner, register)
        except SignSheetError as exc:
            return self._domain_failure(op, exc)

        if already:
            warnings.append(f"Already signed in on {self._format(on)}")
        log.info("sheet.signed_in", owner=owner, date=on.isoformat(), created=created)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "owner": owner,
                "year": register.year,
                "date": self._format(on),
                "created": created,
                "already_signed_in": already,
                "signed_in": register.count_sign_in_days(),
            },
            warnings=warnings,
        )

    @traced
    def import_record(
        self,
        record: bytes,
        *,
        owner: str | None = None,
        replace: bool = False,
    ) -> ServiceResult:
        """Store a serialized 48-byte record under *owner*."""
        op = "import_sheet"
        owner = self._owner(owner)
        try:
            register = YearSignInRegister.from_bytes(record, strict=self._strict)
            with self._store.transaction() as repo:
                if not replace and repo.exists(owner, register.year):
                    return failure(
                        op,
                        "SHEET_EXISTS",
                        f"A register for owner {owner!r} in {register.year} already exists "
                        "(use --replace to overwrite)",
                        owner=owner,
                        year=register.year,
                    )
                inserted = repo.save(owner, register)
        except SignSheetError as exc:
            return self._domain_failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "owner": owner,
                "year": register.year,
                "replaced": not inserted,
                "signed_in": register.count_sign_in_days(),
            },
        )

    @traced
    def delete(self, year: int, *, owner: str | None = None) -> ServiceResult:
        op = "delete_sheet"
        owner = self._owner(owner)
        with self._store.transaction() as repo:
            removed = repo.delete(owner, year)
        if not removed:
            return self._not_found(op, owner, year)
        return ServiceResult(ok=True, op=op, data={"owner": owner, "year": year})

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _load(self, op: str, owner: str, year: int) -> YearSignInRegister | ServiceResult:
        with trace_span("load"), self._store.connect() as repo:
            register = repo.get(owner, year, strict=self._strict)
        if register is None:
            return self._not_found(op, owner, year)
        return register

    @traced
    def status(self, on: date, *, owner: str | None = None) -> ServiceResult:
        """Whether *owner* signed in on *on*.

        Lenient like the register query: a year with no stored register
        answers False (with a warning) instead of failing.
        """
        op = "status"
        owner = self._owner(owner)
        warnings: list[str] = []
        try:
            with self._store.connect() as repo:
                register = repo.get(owner, on.year, strict=self._strict)
        except SignSheetError as exc:
            return self._domain_failure(op, exc)

        if register is None:
            warnings.append(f"No register for owner {owner!r} in {on.year}")
            signed = False
        else:
            signed = register.is_signed_in(on)
        return ServiceResult(
            ok=True,
            op=op,
            data={"owner": owner, "date": self._format(on), "signed_in": signed},
            warnings=warnings,
        )

    @traced
    def count(
        self, year: int, *, month: int | None = None, owner: str | None = None
    ) -> ServiceResult:
        """Signed-in and not-signed-in totals for *year*, or one *month* of it."""
        op = "count"
        owner = self._owner(owner)
        try:
            loaded = self._load(op, owner, year)
            if isinstance(loaded, ServiceResult):
                return loaded
            if month is None:
                signed = loaded.count_sign_in_days()
                missed = loaded.count_not_sign_in_days()
            else:
                signed = loaded.count_sign_in_days_in_month(month)
                missed = loaded.count_not_sign_in_days_in_month(month)
        except SignSheetError as exc:
            return self._domain_failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "owner": owner,
                "year": year,
                "month": month,
                "signed_in": signed,
                "not_signed_in": missed,
                "total": signed + missed,
            },
        )

    @traced
    def list_days(
        self,
        year: int,
        *,
        month: int | None = None,
        missed: bool = False,
        owner: str | None = None,
    ) -> ServiceResult:
        """Dates signed in (or, with *missed*, not signed in), ascending."""
        op = "list_days"
        owner = self._owner(owner)
        try:
            loaded = self._load(op, owner, year)
            if isinstance(loaded, ServiceResult):
                return loaded
            with trace_span("enumerate"):
                if month is None:
                    days = (
                        loaded.list_not_signed_in_days()
                        if missed
                        else loaded.list_signed_in_days()
                    )
                else:
                    days = (
                        loaded.list_not_signed_in_days_in_month(month)
                        if missed
                        else loaded.list_signed_in_days_in_month(month)
                    )
        except SignSheetError as exc:
            return self._domain_failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "owner": owner,
                "year": year,
                "month": month,
                "kind": "not_signed_in" if missed else "signed_in",
                "count": len(days),
                "days": [self._format(d) for d in days],
            },
        )

    @traced
    def list_sheets(self, *, owner: str | None = None, year: int | None = None) -> ServiceResult:
        """Stored registers, optionally filtered. No owner means every owner."""
        with self._store.connect() as repo:
            items: list[dict[str, Any]] = repo.list_rows(owner=owner, year=year)
        return ServiceResult(
            ok=True,
            op="list_sheets",
            data={"count": len(items), "items": items},
        )

    @traced
    def export_record(self, year: int, *, owner: str | None = None) -> ServiceResult:
        """The stored register as its 48-byte record, hex-encoded."""
        op = "export_sheet"
        owner = self._owner(owner)
        try:
            loaded = self._load(op, owner, year)
        except SignSheetError as exc:
            return self._domain_failure(op, exc)
        if isinstance(loaded, ServiceResult):
            return loaded

        record = loaded.to_bytes()
        return ServiceResult(
            ok=True,
            op=op,
            data={"owner": owner, "year": year, "length": len(record), "hex": record.hex()},
        )
