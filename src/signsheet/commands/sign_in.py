"""Command: record a sign-in."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import click

from signsheet.commands._base import DATE, SheetCommand, owner_option
from signsheet.services.sheet import SheetService

if TYPE_CHECKING:
    from signsheet.commands._context import AppContext


@click.command(
    "sign-in",
    cls=SheetCommand,
    examples="""\
  signsheet sign-in
  signsheet sign-in --owner alice
  signsheet sign-in --date 2024-03-15
  signsheet sign-in --date 2024-03-15 --year 2024""",
)
@owner_option
@click.option("--date", "on", type=DATE, default=None, help="Day to sign in (default: today).")
@click.option(
    "--year",
    type=int,
    default=None,
    help="Register year to write to (must match the date's year).",
)
@click.pass_obj
def sign_in(app: AppContext, owner: str | None, on: date | None, year: int | None) -> None:
    """Sign in for today, or for --date."""
    app.emit(SheetService(app.store).sign_in(owner=owner, on=on, year=year))
