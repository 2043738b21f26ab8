"""SQLAlchemy Core table definitions for the signsheet database.

A register is stored as its raw 48-byte record. The year is duplicated
into its own indexed column so per-year queries never have to decode
blobs, and ``signed_in`` keeps a materialized count for listings.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    Index,
    Integer,
    LargeBinary,
    MetaData,
    PrimaryKeyConstraint,
    Table,
    Text,
)

from signsheet.domain.register import RECORD_LENGTH

metadata = MetaData()

sheets = Table(
    "sheets",
    metadata,
    Column("owner", Text, nullable=False),
    Column("year", Integer, nullable=False),
    Column("data", LargeBinary(RECORD_LENGTH), nullable=False),
    Column("signed_in", Integer, nullable=False, default=0, server_default="0"),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
    PrimaryKeyConstraint("owner", "year"),
    Index("ix_sheets_year", "year"),
)
