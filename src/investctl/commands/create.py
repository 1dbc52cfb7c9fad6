"""Command: register a new investment."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from investctl.commands._base import InvestCommand

if TYPE_CHECKING:
    from investctl.commands._context import AppContext

_DATE = click.DateTime(formats=["%Y-%m-%d"])


@click.command(
    cls=InvestCommand,
    examples=[
        "investctl create sample --value 1000"
        " --initial-date 2021-01-01 --expiration-date 2022-01-01",
        'investctl --json create "Treasury 2030" --value 2500.50'
        " --initial-date 2024-03-01 --expiration-date 2030-03-01",
    ],
)
@click.argument("name")
@click.option(
    "--value",
    type=click.FloatRange(min=0),
    required=True,
    help="Opening balance.",
)
@click.option("--initial-date", type=_DATE, required=True, help="Opening date (YYYY-MM-DD).")
@click.option(
    "--expiration-date",
    type=_DATE,
    required=True,
    help="Maturity date (YYYY-MM-DD), after the initial date.",
)
@click.pass_obj
def create(
    app: AppContext,
    name: str,
    value: float,
    initial_date: datetime,
    expiration_date: datetime,
) -> None:
    """Register a new investment called NAME."""
    app.emit(
        app.service.create_investment(
            name,
            value=value,
            initial_date=initial_date.date(),
            expiration_date=expiration_date.date(),
        )
    )
