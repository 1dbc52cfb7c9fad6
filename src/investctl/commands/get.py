"""Command: look up an investment by name."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from investctl.commands._base import InvestCommand

if TYPE_CHECKING:
    from investctl.commands._context import AppContext


@click.command(
    cls=InvestCommand,
    examples=["investctl get sample", 'investctl --json get "Treasury 2030"'],
)
@click.argument("name")
@click.pass_obj
def get(app: AppContext, name: str) -> None:
    """Show the investment called NAME."""
    app.emit(app.service.find_by_name(name))
