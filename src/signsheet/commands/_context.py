"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands with
``@click.pass_obj``. Opens the store lazily and owns result emission
(stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from signsheet.config.logging import configure_logging
from signsheet.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from signsheet.config.settings import SignSheetSettings
    from signsheet.infrastructure.store import SheetStore
    from signsheet.services.result import ServiceResult


class AppContext:
    """Per-invocation state: settings plus a lazily opened store.

    ``--help`` and ``--version`` never touch the database because the
    store is only created on first access.
    """

    def __init__(self, settings: SignSheetSettings) -> None:
        self.settings = settings
        self._store: SheetStore | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from signsheet.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> SheetStore:
        """The store instance (created lazily on first access)."""
        if self._store is None:
            from signsheet.infrastructure.store import SheetStore

            self._store = SheetStore(self.settings)
        return self._store

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult and set the exit status.

        * Success: stdout, warnings to stderr (outside JSON mode, where
          they are already part of the payload).
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
