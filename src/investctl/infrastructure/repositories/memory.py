"""In-memory investment repository (dict keyed by id plus a name index)."""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

from investctl.infrastructure.repositories.base import InvestmentRepository

if TYPE_CHECKING:
    from investctl.domain.investment import Investment


class InMemoryInvestmentRepository(InvestmentRepository):
    """Deterministic repository backed by plain dicts.

    Ids are assigned from a counter starting at 1.  Records supplied with
    an explicit id keep it, and the counter skips past it.
    """

    def __init__(self) -> None:
        self._records: dict[int, Investment] = {}
        self._name_index: dict[str, int] = {}
        self._ids = itertools.count(1)

    def find_by_name(self, name: str) -> Investment | None:
        investment_id = self._name_index.get(name)
        if investment_id is None:
            return None
        return self._records.get(investment_id)

    def find_by_id(self, investment_id: int) -> Investment | None:
        return self._records.get(investment_id)

    def find_all(self) -> list[Investment]:
        return [self._records[key] for key in sorted(self._records)]

    def save(self, investment: Investment) -> Investment:
        if investment.id is None:
            investment = investment.model_copy(update={"id": self._next_id()})
        else:
            self._reserve_id(investment.id)

        previous = self._records.get(investment.id)  # type: ignore[arg-type]
        if previous is not None and previous.name != investment.name:
            self._name_index.pop(previous.name, None)

        self._records[investment.id] = investment  # type: ignore[index]
        self._name_index[investment.name] = investment.id  # type: ignore[assignment]
        return investment

    def delete_by_id(self, investment_id: int) -> None:
        removed = self._records.pop(investment_id, None)
        if removed is not None:
            self._name_index.pop(removed.name, None)

    def _next_id(self) -> int:
        while True:
            candidate = next(self._ids)
            if candidate not in self._records:
                return candidate

    def _reserve_id(self, investment_id: int) -> None:
        """Advance the counter past an explicitly supplied id."""
        current = next(self._ids)
        self._ids = itertools.count(max(current, investment_id + 1))
