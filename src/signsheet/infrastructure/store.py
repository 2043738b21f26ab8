"""SheetStore — owner of the database engine and transaction boundary.

The store is the single dependency injected into every service. Writes
go through :meth:`SheetStore.transaction`, which commits on success and
rolls back on any exception; reads can use :meth:`SheetStore.connect`.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from signsheet.infrastructure.database.engine import READ_ONLY, init_database
from signsheet.infrastructure.repositories.sheets import SheetRepository

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from signsheet.config.settings import SignSheetSettings


class SheetStore:
    """Database access for registers, built from :class:`SignSheetSettings`."""

    def __init__(self, settings: SignSheetSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(settings.db_path)

    @property
    def settings(self) -> SignSheetSettings:
        return self._settings

    @property
    def db_path(self) -> Path:
        return self._settings.db_path

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @contextmanager
    def transaction(self) -> Iterator[SheetRepository]:
        """Yield a repository bound to one ``engine.begin()`` transaction.

        The transaction holds the database write lock from its first read,
        so a concurrent writer waits instead of overwriting this one.

        Usage::

            with store.transaction() as repo:
                register = repo.get(owner, 2024)
                register.sign_in_today(today)
                repo.save(owner, register)
        """
        with self._engine.begin() as conn:
            yield SheetRepository(conn)

    @contextmanager
    def connect(self) -> Iterator[SheetRepository]:
        """Yield a repository on a read connection.

        Its transaction begins deferred, so reads do not wait for writers.
        """
        with self._engine.connect() as conn:
            conn.execution_options(**{READ_ONLY: True})
            yield SheetRepository(conn)

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self._engine.dispose()
