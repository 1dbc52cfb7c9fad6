"""BaseService — foundation for investctl services.

Every service receives an :class:`InvestmentRepository` at construction
time and performs all data access through it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from investctl.infrastructure.repositories.base import InvestmentRepository


class BaseService:
    """Base for service-layer classes.

    Usage::

        class InvestmentService(BaseService):
            def apply(self, investment_id: int, amount: float) -> ServiceResult:
                investment = self._repository.find_by_id(investment_id)
                ...
    """

    def __init__(self, repository: InvestmentRepository) -> None:
        self._repository = repository
