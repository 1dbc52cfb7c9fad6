"""SQLite-backed investment repository using SQLAlchemy Core."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update

from investctl.domain.investment import Investment
from investctl.infrastructure.database.schema import investments
from investctl.infrastructure.repositories.base import InvestmentRepository

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class SqlInvestmentRepository(InvestmentRepository):
    """Encapsulates SQL for the ``investments`` table.

    Each public method opens its own connection; writes run inside
    ``engine.begin()`` so a single call commits or rolls back as a unit.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine."""
        return self._engine

    def find_by_name(self, name: str) -> Investment | None:
        stmt = select(investments).where(investments.c.name == name)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return _row_to_investment(row) if row is not None else None

    def find_by_id(self, investment_id: int) -> Investment | None:
        stmt = select(investments).where(investments.c.id == investment_id)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return _row_to_investment(row) if row is not None else None

    def find_all(self) -> list[Investment]:
        stmt = select(investments).order_by(investments.c.id)
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [_row_to_investment(row) for row in rows]

    def save(self, investment: Investment) -> Investment:
        values = _investment_to_row(investment)
        with self._engine.begin() as conn:
            if investment.id is not None:
                exists = conn.execute(
                    select(investments.c.id).where(investments.c.id == investment.id)
                ).first()
                if exists is not None:
                    conn.execute(
                        update(investments)
                        .where(investments.c.id == investment.id)
                        .values(**values)
                    )
                    return investment
                values["id"] = investment.id

            result = conn.execute(insert(investments).values(**values))
            new_id = int(result.inserted_primary_key[0])
        return investment.model_copy(update={"id": new_id})

    def delete_by_id(self, investment_id: int) -> None:
        with self._engine.begin() as conn:
            conn.execute(delete(investments).where(investments.c.id == investment_id))

    def close(self) -> None:
        """Dispose the engine's connection pool."""
        self._engine.dispose()


def _investment_to_row(investment: Investment) -> dict[str, Any]:
    return {
        "name": investment.name,
        "value": investment.value,
        "initial_date": investment.initial_date.isoformat(),
        "expiration_date": investment.expiration_date.isoformat(),
    }


def _row_to_investment(row: Any) -> Investment:
    return Investment(
        id=int(row["id"]),
        name=str(row["name"]),
        value=float(row["value"]),
        initial_date=date.fromisoformat(row["initial_date"]),
        expiration_date=date.fromisoformat(row["expiration_date"]),
    )
