"""SQLite database engine and schema via SQLAlchemy Core."""

from signsheet.infrastructure.database.engine import create_db_engine, init_database
from signsheet.infrastructure.database.schema import metadata, sheets

__all__ = [
    "create_db_engine",
    "init_database",
    "metadata",
    "sheets",
]
