"""SQLAlchemy Core table definitions for the investctl database."""

from __future__ import annotations

from sqlalchemy import REAL, Column, Index, Integer, MetaData, Table, Text

metadata = MetaData()

investments = Table(
    "investments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False, unique=True),
    Column("value", REAL, nullable=False, default=0.0, server_default="0.0"),
    Column("initial_date", Text, nullable=False),  # ISO YYYY-MM-DD
    Column("expiration_date", Text, nullable=False),  # ISO YYYY-MM-DD
)

Index("ix_investments_expiration", investments.c.expiration_date)
