"""Command: load a 48-byte record (named import_cmd to avoid the keyword)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from signsheet.commands._base import SheetCommand, owner_option
from signsheet.services.result import failure
from signsheet.services.sheet import SheetService

if TYPE_CHECKING:
    from signsheet.commands._context import AppContext


@click.command(
    "import",
    cls=SheetCommand,
    examples="""\
  signsheet import alice-2024.bin --owner alice
  signsheet import --hex e807000000...00
  signsheet import alice-2024.bin --replace""",
)
@click.argument("source")
@owner_option
@click.option("--hex", "as_hex", is_flag=True, help="SOURCE is the record as a hex string.")
@click.option("--replace", is_flag=True, help="Overwrite an existing register.")
@click.pass_obj
def import_cmd(
    app: AppContext,
    source: str,
    owner: str | None,
    as_hex: bool,
    replace: bool,
) -> None:
    """Import a register from a record file (or hex with --hex)."""
    if as_hex:
        try:
            record = bytes.fromhex(source)
        except ValueError:
            app.emit(failure("import_sheet", "INVALID_HEX", "SOURCE is not a valid hex string"))
            return
    else:
        path = Path(source)
        if not path.is_file():
            app.emit(failure("import_sheet", "NOT_FOUND", f"No such file: {source}"))
            return
        record = path.read_bytes()

    app.emit(SheetService(app.store).import_record(record, owner=owner, replace=replace))
