"""InvestmentRepository — the storage contract the service layer depends on.

Keyed by integer id with a secondary unique lookup by name.  Every call
is atomic from the caller's point of view; the repository performs no
cross-call transactions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from investctl.domain.investment import Investment


class InvestmentRepository(ABC):
    """Abstract base class for investment storage backends."""

    @abstractmethod
    def find_by_name(self, name: str) -> Investment | None:
        """Return the investment called *name*, or None."""
        ...

    @abstractmethod
    def find_by_id(self, investment_id: int) -> Investment | None:
        """Return the investment with *investment_id*, or None."""
        ...

    @abstractmethod
    def find_all(self) -> list[Investment]:
        """Return every stored investment ordered by id."""
        ...

    @abstractmethod
    def save(self, investment: Investment) -> Investment:
        """Insert or update *investment* and return the stored record.

        A record without an id (or with an id not yet stored) is inserted;
        the returned copy carries the assigned id.
        """
        ...

    @abstractmethod
    def delete_by_id(self, investment_id: int) -> None:
        """Remove the investment with *investment_id*.  No-op if absent."""
        ...

    def close(self) -> None:
        """Release backend resources.  Default: nothing to release."""
        return None
