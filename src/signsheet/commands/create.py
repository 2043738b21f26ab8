"""Command: create an empty register for a year."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from signsheet.commands._base import SheetCommand, owner_option
from signsheet.services.sheet import SheetService

if TYPE_CHECKING:
    from signsheet.commands._context import AppContext


@click.command(
    cls=SheetCommand,
    examples="""\
  signsheet create 2024
  signsheet create 2024 --owner alice""",
)
@click.argument("year", type=int)
@owner_option
@click.pass_obj
def create(app: AppContext, year: int, owner: str | None) -> None:
    """Create an empty register for YEAR."""
    app.emit(SheetService(app.store).create(year, owner=owner))
