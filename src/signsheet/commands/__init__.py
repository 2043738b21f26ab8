"""Subcommand modules for signsheet.

Provides register_commands(), which imports command modules only when
the CLI is built so ``signsheet --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the query group and the standalone commands on the root group."""
    from signsheet.commands.query import query

    cli.add_command(query)

    from signsheet.commands.create import create
    from signsheet.commands.delete import delete
    from signsheet.commands.export import export
    from signsheet.commands.import_cmd import import_cmd
    from signsheet.commands.init_cmd import init_cmd
    from signsheet.commands.sign_in import sign_in

    cli.add_command(init_cmd)
    cli.add_command(create)
    cli.add_command(sign_in)
    cli.add_command(export)
    cli.add_command(import_cmd)
    cli.add_command(delete)
