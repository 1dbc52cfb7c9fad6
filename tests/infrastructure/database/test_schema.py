"""Tests for database schema definitions."""

import pytest
from sqlalchemy import create_engine, insert, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from investctl.infrastructure.database.schema import investments, metadata


def _in_memory_engine() -> Engine:
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine("sqlite:///:memory:")
    metadata.create_all(engine)
    return engine


def _row(name: str = "sample") -> dict[str, object]:
    return {
        "name": name,
        "value": 1000.0,
        "initial_date": "2021-01-01",
        "expiration_date": "2022-01-01",
    }


class TestInvestmentsTable:
    def test_columns(self) -> None:
        columns = {c["name"] for c in inspect(_in_memory_engine()).get_columns("investments")}
        assert columns == {"id", "name", "value", "initial_date", "expiration_date"}

    def test_primary_key(self) -> None:
        pk = inspect(_in_memory_engine()).get_pk_constraint("investments")
        assert pk["constrained_columns"] == ["id"]

    def test_expiration_index(self) -> None:
        indexes = inspect(_in_memory_engine()).get_indexes("investments")
        assert "ix_investments_expiration" in {ix["name"] for ix in indexes}

    def test_name_unique(self) -> None:
        engine = _in_memory_engine()
        with engine.begin() as conn:
            conn.execute(insert(investments).values(**_row()))
        with pytest.raises(IntegrityError), engine.begin() as conn:
            conn.execute(insert(investments).values(**_row()))

    def test_create_all_is_idempotent(self) -> None:
        engine = _in_memory_engine()
        metadata.create_all(engine)
        assert "investments" in inspect(engine).get_table_names()
