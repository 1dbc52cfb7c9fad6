"""Investment model, balance rules, and request/response mapping.

An investment is a named balance held between an initial date and an
expiration date.  The model is immutable: ``apply_amount`` and
``withdraw_amount`` return updated copies which the service persists
through the repository.

Rules live as plain functions next to the model:

- ``has_valid_term()``: the initial date must fall strictly before the
  expiration date.
- ``can_withdraw()``: a withdrawal may not exceed the current value.

``to_model()`` and ``to_payload()`` convert between the external request
and response shapes and the internal record.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field


class InvestmentCreate(BaseModel):
    """Request shape for creating an investment."""

    model_config = {"frozen": True}

    id: int | None = None
    name: str = Field(..., min_length=1)
    value: float = Field(..., ge=0)
    initial_date: date
    expiration_date: date


class Investment(BaseModel):
    """A stored investment record.

    ``id`` is None until the repository assigns one on first save.
    """

    model_config = {"frozen": True}

    id: int | None = None
    name: str = Field(..., min_length=1)
    value: float = Field(..., ge=0)
    initial_date: date
    expiration_date: date


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def has_valid_term(initial_date: date, expiration_date: date) -> bool:
    """True when *initial_date* is strictly before *expiration_date*."""
    return initial_date < expiration_date


def can_withdraw(investment: Investment, amount: float) -> bool:
    """True when *amount* does not exceed the current value."""
    return amount <= investment.value


def apply_amount(investment: Investment, amount: float) -> Investment:
    """Return a copy of *investment* with *amount* added to its value."""
    return investment.model_copy(update={"value": investment.value + amount})


def withdraw_amount(investment: Investment, amount: float) -> Investment:
    """Return a copy of *investment* with *amount* subtracted from its value.

    Raises:
        ValueError: If *amount* exceeds the current value.
    """
    if not can_withdraw(investment, amount):
        msg = f"Withdrawal of {amount} exceeds balance {investment.value}"
        raise ValueError(msg)
    return investment.model_copy(update={"value": investment.value - amount})


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------


def to_model(data: InvestmentCreate) -> Investment:
    """Convert a creation request into an (unsaved) investment record."""
    return Investment(
        id=data.id,
        name=data.name,
        value=data.value,
        initial_date=data.initial_date,
        expiration_date=data.expiration_date,
    )


def to_payload(investment: Investment) -> dict[str, Any]:
    """Convert an investment record into the response payload dict."""
    return {
        "id": investment.id,
        "name": investment.name,
        "value": investment.value,
        "initial_date": investment.initial_date,
        "expiration_date": investment.expiration_date,
    }
