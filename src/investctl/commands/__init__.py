"""Subcommand modules for investctl.

Provides register_commands() which uses deferred imports to keep
``investctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from investctl.commands.balance import apply, withdraw
    from investctl.commands.create import create
    from investctl.commands.delete import delete
    from investctl.commands.get import get
    from investctl.commands.list_cmd import list_cmd

    cli.add_command(create)
    cli.add_command(get)
    cli.add_command(list_cmd)
    cli.add_command(delete)
    cli.add_command(apply)
    cli.add_command(withdraw)
