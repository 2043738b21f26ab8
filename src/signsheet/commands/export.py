"""Command: write a register's 48-byte record."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from signsheet.commands._base import SheetCommand, owner_option
from signsheet.services.sheet import SheetService

if TYPE_CHECKING:
    from signsheet.commands._context import AppContext


@click.command(
    cls=SheetCommand,
    examples="""\
  signsheet export 2024
  signsheet export 2024 --owner alice -o alice-2024.bin
  signsheet -q export 2024 > 2024.hex""",
)
@click.argument("year", type=int)
@owner_option
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the raw 48 bytes to a file instead of printing hex.",
)
@click.pass_obj
def export(app: AppContext, year: int, owner: str | None, output: Path | None) -> None:
    """Export the register for YEAR."""
    result = SheetService(app.store).export_record(year, owner=owner)
    if result.ok and output is not None:
        output.write_bytes(bytes.fromhex(result.data["hex"]))
        data = {k: v for k, v in result.data.items() if k != "hex"}
        result = result.model_copy(update={"data": {**data, "path": str(output)}})
    app.emit(result)
