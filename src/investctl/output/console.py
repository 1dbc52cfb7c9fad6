"""Rich Console factory and theme for investctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

INVEST_THEME = Theme(
    {
        "invest.ok": "bold green",
        "invest.error": "bold red",
        "invest.op": "bold cyan",
        "invest.key": "dim",
        "invest.id": "bold blue",
        "invest.name": "bold",
        "invest.value": "magenta",
        "invest.date": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=INVEST_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def format_money(value: float, *, currency: str = "", decimals: int = 2) -> str:
    """Format *value* with thousands separators and an optional currency code.

    Examples:
        >>> format_money(1800.0, currency="BRL")
        'BRL 1,800.00'
        >>> format_money(12.5, decimals=1)
        '12.5'
    """
    amount = f"{value:,.{decimals}f}"
    return f"{currency} {amount}" if currency else amount
