"""Command: list every investment."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from investctl.commands._base import InvestCommand

if TYPE_CHECKING:
    from investctl.commands._context import AppContext


@click.command(
    "list",
    cls=InvestCommand,
    examples=["investctl list", "investctl -q list", "investctl --json list"],
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List all investments ordered by ID."""
    app.emit(app.service.list_all())
