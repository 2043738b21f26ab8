"""Repository for stored sign-in registers.

Every method runs on a caller-supplied ``Connection`` so reads and writes
join whatever transaction the service opened (load, mutate, save).
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update

from signsheet.domain.register import YearSignInRegister
from signsheet.infrastructure.database.schema import sheets

if TYPE_CHECKING:
    from sqlalchemy import Connection


def _timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="seconds")


class SheetRepository:
    """SQL for the ``sheets`` table, keyed by ``(owner, year)``."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def exists(self, owner: str, year: int) -> bool:
        row = self._conn.execute(
            select(sheets.c.year).where(sheets.c.owner == owner, sheets.c.year == year)
        ).first()
        return row is not None

    def get(self, owner: str, year: int, *, strict: bool = False) -> YearSignInRegister | None:
        """Decode the stored register, or None if there is none."""
        data = self._conn.execute(
            select(sheets.c.data).where(sheets.c.owner == owner, sheets.c.year == year)
        ).scalar_one_or_none()
        if data is None:
            return None
        return YearSignInRegister.from_bytes(bytes(data), strict=strict)

    def save(self, owner: str, register: YearSignInRegister) -> bool:
        """Insert or replace the row for *register*. Returns True if inserted."""
        now = _timestamp()
        values = {
            "data": register.to_bytes(),
            "signed_in": register.count_sign_in_days(),
            "modified": now,
        }
        if self.exists(owner, register.year):
            self._conn.execute(
                update(sheets)
                .where(sheets.c.owner == owner, sheets.c.year == register.year)
                .values(**values)
            )
            return False

        self._conn.execute(
            insert(sheets).values(owner=owner, year=register.year, created=now, **values)
        )
        return True

    def delete(self, owner: str, year: int) -> bool:
        result = self._conn.execute(
            delete(sheets).where(sheets.c.owner == owner, sheets.c.year == year)
        )
        return result.rowcount > 0

    def list_rows(
        self, *, owner: str | None = None, year: int | None = None
    ) -> list[dict[str, Any]]:
        """Row summaries (no blobs), ordered by owner then year."""
        stmt = select(
            sheets.c.owner,
            sheets.c.year,
            sheets.c.signed_in,
            sheets.c.created,
            sheets.c.modified,
        ).order_by(sheets.c.owner, sheets.c.year)
        if owner is not None:
            stmt = stmt.where(sheets.c.owner == owner)
        if year is not None:
            stmt = stmt.where(sheets.c.year == year)
        return [dict(row) for row in self._conn.execute(stmt).mappings().all()]
