"""Command: remove a stored register."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from signsheet.commands._base import SheetCommand, owner_option
from signsheet.services.sheet import SheetService

if TYPE_CHECKING:
    from signsheet.commands._context import AppContext


@click.command(cls=SheetCommand, examples="  signsheet delete 2023 --owner alice")
@click.argument("year", type=int)
@owner_option
@click.pass_obj
def delete(app: AppContext, year: int, owner: str | None) -> None:
    """Delete the register for YEAR."""
    app.emit(SheetService(app.store).delete(year, owner=owner))
