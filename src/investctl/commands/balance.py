"""Commands: apply funds to and withdraw funds from an investment."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from investctl.commands._base import InvestCommand

if TYPE_CHECKING:
    from investctl.commands._context import AppContext

_AMOUNT = click.FloatRange(min=0, min_open=True)


@click.command(
    cls=InvestCommand,
    examples=["investctl apply 1 1000", "investctl --json apply 1 250.75"],
)
@click.argument("investment_id", type=int)
@click.argument("amount", type=_AMOUNT)
@click.pass_obj
def apply(app: AppContext, investment_id: int, amount: float) -> None:
    """Deposit AMOUNT into the investment with INVESTMENT_ID."""
    app.emit(app.service.apply(investment_id, amount))


@click.command(
    cls=InvestCommand,
    examples=["investctl withdraw 1 200", "investctl --json withdraw 1 50.25"],
)
@click.argument("investment_id", type=int)
@click.argument("amount", type=_AMOUNT)
@click.pass_obj
def withdraw(app: AppContext, investment_id: int, amount: float) -> None:
    """Withdraw AMOUNT from the investment with INVESTMENT_ID.

    Fails when AMOUNT exceeds the current balance.
    """
    app.emit(app.service.withdraw(investment_id, amount))
