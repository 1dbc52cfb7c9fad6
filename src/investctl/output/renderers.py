"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from investctl.output.console import create_console, format_money, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from investctl.services.result import ServiceResult

_MONEY_KEYS = frozenset({"value", "amount", "previous_value"})


@dataclass(frozen=True)
class MoneyFormat:
    """Currency code and precision used for monetary fields."""

    currency: str = ""
    decimals: int = 2

    def __call__(self, value: Any) -> str:
        if isinstance(value, (int, float)):
            return format_money(float(value), currency=self.currency, decimals=self.decimals)
        return str(value)


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    money: MoneyFormat | None = None,
) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()
    fmt = money or MoneyFormat()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose, money=fmt)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if "id" in item)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="invest.ok")
    op = Text(f"  {result.op}", style="invest.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any, money: MoneyFormat) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}:", style="invest.key")
    if key == "id":
        v = Text(str(value), style="invest.id")
    elif key == "name":
        v = Text(str(value), style="invest.name")
    elif key in _MONEY_KEYS:
        v = Text(money(value), style="invest.value")
    elif key.endswith("_date"):
        v = Text(str(value), style="invest.date")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block; verbose runs carry the operation trace."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_trace(console, v)
        else:
            console.print(f"    {k}: {v}")


def _timing_style(duration_ms: float) -> str:
    if duration_ms > 1000:
        return "bold red"
    if duration_ms > 100:
        return "yellow"
    return "dim"


def _render_trace(console: Console, trace: dict[str, Any]) -> None:
    """Render an operation trace: a header line, then one line per step."""
    duration = trace.get("duration_ms", 0.0)
    style = _timing_style(duration)
    header = Text("    ")
    header.append(f"{duration:>8.2f}ms", style=style)
    header.append(f"  {trace.get('operation', '?')}", style="invest.op")
    if trace.get("investment_id") is not None:
        header.append(f" #{trace['investment_id']}", style="invest.id")
    header.append(f"  [{trace.get('outcome', '?')}]")
    console.print(header)

    for entry in trace.get("steps", []):
        line = Text("        ")
        line.append(f"{entry['duration_ms']:>8.2f}ms", style=_timing_style(entry["duration_ms"]))
        line.append(f"  {entry['name']}")
        tags = entry.get("tags") or {}
        if tags:
            line.append("  (" + ", ".join(f"{tk}={tv}" for tk, tv in tags.items()) + ")")
        console.print(line)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="invest.error")
    op = Text(f"  {result.op}", style="invest.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if err is not None:
        console.print(Text(f"  code: {err.code}", style="dim"))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_mutation(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    money: MoneyFormat,
) -> None:
    """Render create/apply/withdraw/delete results."""
    _status_line(console, result)
    keys = ("id", "name", "previous_value", "amount", "value", "initial_date", "expiration_date")
    for key in keys:
        if key in result.data:
            _field(console, key, result.data[key], money)
    if verbose:
        _render_meta(console, result)


def _render_single_item(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    money: MoneyFormat,
) -> None:
    """Render a looked-up investment as a panel."""
    d = result.data
    lines = [
        f"[invest.key]id:[/invest.key] {d.get('id', '')}",
        f"[invest.key]value:[/invest.key] {money(d.get('value', ''))}",
        f"[invest.key]initial_date:[/invest.key] {d.get('initial_date', '')}",
        f"[invest.key]expiration_date:[/invest.key] {d.get('expiration_date', '')}",
    ]
    console.print(
        Panel(
            "\n".join(lines),
            title=f"[invest.name]{d.get('name', '')}[/invest.name]",
            expand=False,
        )
    )
    if verbose:
        _render_meta(console, result)


def _render_investment_table(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    money: MoneyFormat,
) -> None:
    """Render list results as a table."""
    items: list[dict[str, Any]] = result.data.get("items", [])
    _status_line(console, result)
    _field(console, "count", result.data.get("count", len(items)), money)

    if items:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("ID", style="invest.id", no_wrap=True, justify="right")
        table.add_column("Name", style="invest.name")
        table.add_column("Value", style="invest.value", justify="right")
        table.add_column("Initial")
        table.add_column("Expiration")
        for item in items:
            table.add_row(
                str(item.get("id", "")),
                str(item.get("name", "")),
                money(item.get("value", "")),
                str(item.get("initial_date", "")),
                str(item.get("expiration_date", "")),
            )
        console.print(table)

    if verbose:
        _render_meta(console, result)


def _render_generic(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    money: MoneyFormat,
) -> None:
    """Fallback: key-value pairs for any op without a dedicated renderer."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value, money)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "create_investment": _render_mutation,
    "delete": _render_mutation,
    "apply": _render_mutation,
    "withdraw": _render_mutation,
    "get": _render_single_item,
    "list_investments": _render_investment_table,
}
