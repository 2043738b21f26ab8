"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.columns import Columns
from rich.table import Table
from rich.text import Text

from signsheet.output.console import create_console, day_style, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from signsheet.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Listings print one entry per line; everything else prints a status.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "list_days":
        return "\n".join(result.data.get("days", []))
    if result.op == "list_sheets":
        return "\n".join(f"{i['owner']}\t{i['year']}" for i in result.data.get("items", []))
    if result.op == "status":
        return "yes" if result.data.get("signed_in") else "no"
    if result.op == "export_sheet":
        return str(result.data.get("hex", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="sheet.ok"), Text(f"  {result.op}", style="sheet.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="sheet.key")
    if key == "owner":
        v = Text(str(value), style="sheet.owner")
    elif key == "date":
        v = Text(str(value), style="sheet.date")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block, including the telemetry span tree."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_span(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    prefix = " " * indent
    duration = span.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    console.print(f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {span.get('name', '?')}")
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="sheet.error"),
        Text(f"  {result.op}", style="sheet.op"),
        Text(" — "),
        Text(msg),
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


def _render_status(result: ServiceResult, console: Console) -> None:
    d = result.data
    signed = bool(d.get("signed_in"))
    mark = Text("signed in" if signed else "not signed in", style=day_style(signed))
    console.print(Text(str(d.get("date", "")), style="sheet.date"), Text("  "), mark)


def _render_count(result: ServiceResult, console: Console) -> None:
    d = result.data
    period = f"{d['year']}-{d['month']:02d}" if d.get("month") else str(d.get("year"))
    owner = Text(f"  owner {d.get('owner')}", style="dim")
    console.print(Text(period, style="sheet.date"), owner)
    table = Table(show_header=False, pad_edge=False, box=None)
    table.add_column(style="sheet.key")
    table.add_column(justify="right")
    table.add_row("signed in", Text(str(d.get("signed_in")), style="sheet.signed"))
    table.add_row("not signed in", Text(str(d.get("not_signed_in")), style="sheet.missed"))
    table.add_row("total days", str(d.get("total")))
    console.print(table)


def _render_days(result: ServiceResult, console: Console) -> None:
    d = result.data
    style = day_style(d.get("kind") != "not_signed_in")
    days = d.get("days", [])
    if days:
        console.print(Columns([Text(day, style=style) for day in days], padding=(0, 2)))
    label = d.get("kind", "").replace("_", " ")
    console.print(f"\n{d.get('count', len(days))} days {label}")


def _render_sheets(result: ServiceResult, console: Console) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Owner", style="sheet.owner", no_wrap=True)
    table.add_column("Year", justify="right")
    table.add_column("Signed in", justify="right", style="sheet.signed")
    table.add_column("Modified", style="dim")
    for item in items:
        table.add_row(
            str(item.get("owner", "")),
            str(item.get("year", "")),
            str(item.get("signed_in", "")),
            str(item.get("modified", "")),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} registers")


def _render_export(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key in ("owner", "year", "length", "path"):
        if key in result.data:
            _field(console, key, result.data[key])
    if "hex" in result.data and "path" not in result.data:
        console.print(result.data["hex"], soft_wrap=True)


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "status": _render_status,
    "count": _render_count,
    "list_days": _render_days,
    "list_sheets": _render_sheets,
    "export_sheet": _render_export,
}
