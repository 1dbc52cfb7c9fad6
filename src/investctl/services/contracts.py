"""Typed payload contracts for service results.

These models validate operation payload shapes before they leave the
service layer so key regressions (for example ``items`` vs ``records``)
fail fast in tests and during development.
"""

from __future__ import annotations

from datetime import date
from typing import Any, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class InvestmentItem(BaseModel):
    """One investment as returned by create, get, and list."""

    id: int
    name: str
    value: float
    initial_date: date
    expiration_date: date


class ListInvestmentsResultData(BaseModel):
    """Payload contract for ``InvestmentService.list_all``."""

    count: int
    items: list[InvestmentItem]


class BalanceChangeData(InvestmentItem):
    """Payload contract for ``apply`` and ``withdraw``."""

    amount: float
    previous_value: float


class DeleteResultData(BaseModel):
    """Payload contract for ``InvestmentService.delete_by_id``."""

    id: int
    name: str
