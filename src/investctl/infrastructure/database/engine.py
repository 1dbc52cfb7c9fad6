"""Database engine setup for SQLite with WAL mode.

The DB is stored at ``{data_root}/.investctl/{filename}``.

SQLAlchemy Core (not ORM) is used because investctl is a short-lived
CLI process — no benefit from session management or identity maps.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from investctl.infrastructure.database.schema import metadata

DATA_DIRNAME = ".investctl"
DEFAULT_DB_FILENAME = "investctl.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(data_root: Path, filename: str = DEFAULT_DB_FILENAME) -> Engine:
    """Initialize the investctl database at ``{data_root}/.investctl/{filename}``.

    Creates the ``.investctl/`` directory and all tables from
    :data:`schema.metadata`.

    Idempotent — safe to call on an existing database.

    Returns the engine ready for use.
    """
    data_dir = data_root / DATA_DIRNAME
    data_dir.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(data_dir / filename)
    metadata.create_all(engine)
    return engine
