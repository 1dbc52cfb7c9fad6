"""SQLite database engine and schema via SQLAlchemy Core."""

from investctl.infrastructure.database.engine import create_db_engine, init_database
from investctl.infrastructure.database.schema import investments, metadata

__all__ = [
    "create_db_engine",
    "init_database",
    "investments",
    "metadata",
]
