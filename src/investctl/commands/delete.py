"""Command: delete an investment by ID."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from investctl.commands._base import InvestCommand

if TYPE_CHECKING:
    from investctl.commands._context import AppContext


@click.command(
    cls=InvestCommand,
    examples=["investctl delete 1", "investctl --json delete 42"],
)
@click.argument("investment_id", type=int)
@click.pass_obj
def delete(app: AppContext, investment_id: int) -> None:
    """Delete the investment with INVESTMENT_ID."""
    app.emit(app.service.delete_by_id(investment_id))
