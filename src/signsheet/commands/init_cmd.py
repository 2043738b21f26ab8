"""Command: store initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from signsheet.commands._base import SheetCommand
from signsheet.services.init import InitService

if TYPE_CHECKING:
    from signsheet.commands._context import AppContext

_INIT_EXAMPLES = """\
  signsheet init
  signsheet init /srv/attendance --owner alice"""


@click.command("init", cls=SheetCommand, examples=_INIT_EXAMPLES)
@click.argument("path", required=False, default=".")
@click.option("--owner", "default_owner", default=None, help="Default register owner.")
@click.pass_obj
def init_cmd(app: AppContext, path: str, default_owner: str | None) -> None:
    """Create signsheet.toml and an empty database."""
    app.emit(InitService.init_store(Path(path).resolve(), default_owner=default_owner))
