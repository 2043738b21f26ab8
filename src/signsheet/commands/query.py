"""Command group: read-only questions about stored registers."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import click

from signsheet.commands._base import DATE, SheetGroup, owner_option
from signsheet.services.sheet import SheetService

if TYPE_CHECKING:
    from signsheet.commands._context import AppContext

_QUERY_EXAMPLES = """\
  signsheet query status 2024-03-15
  signsheet query count 2024
  signsheet query count 2024 --month 2
  signsheet query days 2024 --month 3
  signsheet query days 2024 --missed
  signsheet query sheets --year 2024"""


@click.group(cls=SheetGroup, examples=_QUERY_EXAMPLES)
@click.pass_obj
def query(app: AppContext) -> None:
    """Query sign-in registers."""


@query.command(
    examples="""\
  signsheet query status 2024-03-15
  signsheet -q query status 2024-03-15 --owner alice"""
)
@click.argument("day", type=DATE)
@owner_option
@click.pass_obj
def status(app: AppContext, day: date, owner: str | None) -> None:
    """Whether DAY (YYYY-MM-DD) was signed in."""
    app.emit(SheetService(app.store).status(day, owner=owner))


@query.command(
    examples="""\
  signsheet query count 2024
  signsheet --json query count 2024 --month 2"""
)
@click.argument("year", type=int)
@click.option("--month", type=int, default=None, help="Restrict to one month (1-12).")
@owner_option
@click.pass_obj
def count(app: AppContext, year: int, month: int | None, owner: str | None) -> None:
    """Count signed-in and not-signed-in days."""
    app.emit(SheetService(app.store).count(year, month=month, owner=owner))


@query.command(
    examples="""\
  signsheet query days 2024
  signsheet query days 2024 --month 3 --missed
  signsheet -q query days 2024 > signed.txt"""
)
@click.argument("year", type=int)
@click.option("--month", type=int, default=None, help="Restrict to one month (1-12).")
@click.option("--missed", is_flag=True, help="List days with no sign-in instead.")
@owner_option
@click.pass_obj
def days(app: AppContext, year: int, month: int | None, missed: bool, owner: str | None) -> None:
    """List signed-in (or missed) days, oldest first."""
    app.emit(SheetService(app.store).list_days(year, month=month, missed=missed, owner=owner))


@query.command(
    examples="""\
  signsheet query sheets
  signsheet query sheets --owner alice
  signsheet query sheets --year 2024"""
)
@click.option("--owner", default=None, help="Only this owner's registers.")
@click.option("--year", type=int, default=None, help="Only registers for this year.")
@click.pass_obj
def sheets(app: AppContext, owner: str | None, year: int | None) -> None:
    """List stored registers."""
    app.emit(SheetService(app.store).list_sheets(owner=owner, year=year))
