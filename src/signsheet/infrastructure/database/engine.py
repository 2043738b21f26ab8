"""SQLite engine for the register store.

SQLAlchemy Core (not ORM) is used because signsheet is a short-lived
CLI process and every row is an opaque fixed-size record. WAL mode lets
a query run while another process is signing in.

pysqlite's own transaction handling defers ``BEGIN`` until the first
write, so a load-mutate-save sequence would read outside its write
lock. The driver is put in autocommit mode and every SQLAlchemy
transaction emits its own ``BEGIN IMMEDIATE`` instead: the write lock
is taken before the row is read, and concurrent writers queue on
``busy_timeout``. Connections marked :data:`READ_ONLY` begin deferred
so queries never wait on a writer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine

from signsheet.infrastructure.database.schema import metadata

logger = logging.getLogger(__name__)

BUSY_TIMEOUT_MS = 5000

# Execution option naming a connection that only reads.
READ_ONLY = "signsheet_read_only"


def create_db_engine(db_path: Path) -> Engine:
    """Engine for *db_path* with WAL journaling and immediate write transactions."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn: Any, _record: Any) -> None:
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        try:
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute(f"PRAGMA busy_timeout={BUSY_TIMEOUT_MS}")
        finally:
            cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn: Connection) -> None:
        if conn.get_execution_options().get(READ_ONLY):
            conn.exec_driver_sql("BEGIN")
        else:
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def init_database(db_path: Path) -> Engine:
    """Open *db_path*, creating its directory and the ``sheets`` table if needed.

    Idempotent; an existing store is left as it is.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path)
    metadata.create_all(engine)
    logger.debug("Database ready at %s", db_path)
    return engine
