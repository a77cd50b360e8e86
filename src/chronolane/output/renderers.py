"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console backed by StringIO; dispatch is by
``result.op`` in :func:`render_result`, with a generic key-value fallback.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from chronolane.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from chronolane.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: item ids for layouts, else the status line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return "\n".join(str(item.get("id", "")) for item in items)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="cl.ok"), Text(f"  {result.op}", style="cl.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="cl.key")
    if key in ("output", "path"):
        v = Text(str(value), style="cl.path")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _fmt(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.2f}".rstrip("0").rstrip(".")
    return str(value)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree."""
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
    duration = span.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = f"{' ' * indent}[{style}]{duration:>8.2f}ms[/{style}]  {span.get('name', '?')}"
    annotations = span.get("annotations") or {}
    scalars = [f"{k}={v}" for k, v in annotations.items() if not isinstance(v, dict)]
    if scalars:
        line += f"  ({', '.join(scalars)})"
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


def _render_warnings(console: Console, warnings: list[str]) -> None:
    for message in warnings:
        console.print(Text("  warning ", style="cl.warning"), Text(message), sep="")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="cl.error")
    op = Text(f"  {result.op}", style="cl.op")
    console.print(label, op, " — ", Text(msg))
    if err and err.code:
        _field(console, "code", err.code)
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Layout renderers ──────────────────────────────────────────────────


def _render_layout(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Canvas summary, lane bands and one row per drawn item."""
    _status_line(console, result)
    d = result.data
    domain = d.get("domain", {})
    _field(console, "canvas", f"{_fmt(d.get('width', 0))} x {_fmt(d.get('height', 0))}")
    _field(console, "domain", f"{domain.get('min', '?')} → {domain.get('max', '?')}")
    _field(console, "total_months", d.get("total_months", 0))
    if "output" in d:
        _field(console, "output", d["output"])

    lanes = d.get("lanes", [])
    if lanes:
        table = Table(show_header=True, pad_edge=False, title="Lanes", title_justify="left")
        table.add_column("Lane", style="cl.lane")
        table.add_column("Top", justify="right", style="cl.coord")
        table.add_column("Height", justify="right", style="cl.coord")
        table.add_column("Rails", justify="right")
        for lane in lanes:
            table.add_row(
                str(lane["name"]), _fmt(lane["top"]), _fmt(lane["height"]), str(lane["rails"])
            )
        console.print()
        console.print(table)

    items = d.get("items", [])
    if items:
        table = Table(show_header=True, pad_edge=False, title="Items", title_justify="left")
        table.add_column("ID", style="cl.id", no_wrap=True)
        table.add_column("Title", style="cl.title")
        table.add_column("Lane", style="cl.lane")
        table.add_column("Kind")
        table.add_column("X", justify="right", style="cl.coord")
        table.add_column("Width", justify="right", style="cl.coord")
        table.add_column("Y", justify="right", style="cl.coord")
        for item in items:
            kind = str(item.get("kind", ""))
            table.add_row(
                str(item.get("id", "")),
                str(item.get("title", "")),
                str(item.get("lane", "")),
                Text(kind, style=style_for_kind(kind)),
                _fmt(item.get("x", 0.0)),
                _fmt(item.get("width", 0.0)) if kind == "bar" else "—",
                _fmt(item.get("y", 0.0)),
            )
        console.print()
        console.print(table)

    if verbose:
        _render_meta(console, result)


def _render_domain(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Domain bounds, scale parameters and the year tick positions."""
    _status_line(console, result)
    d = result.data
    for key in ("min", "max", "pad_months", "pixels_per_month", "total_months", "span"):
        if key in d:
            _field(console, key, _fmt(d[key]))
    ticks = d.get("ticks", [])
    if ticks:
        table = Table(show_header=True, pad_edge=False, title="Year ticks", title_justify="left")
        table.add_column("Year")
        table.add_column("X", justify="right", style="cl.coord")
        for tick in ticks:
            table.add_row(str(tick["year"]), _fmt(tick["x"]))
        console.print()
        console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Lane summary followed by every ingestion issue."""
    d = result.data
    issues = d.get("issues", [])
    _status_line(console, result)
    _field(console, "items", d.get("items", 0))
    _field(console, "skipped", d.get("skipped", 0))
    for lane in d.get("lanes", []):
        console.print(
            Text(f"  {lane['name']}", style="cl.lane"),
            Text(f": {lane['items']} item(s), {lane['rails']} rail(s)"),
            sep="",
        )
    if not issues:
        console.print("[cl.ok]OK[/cl.ok]  No issues found.")
    else:
        console.print()
        _render_warnings(console, issues)
        console.print(f"\n{len(issues)} issue(s)")
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "build_layout": _render_layout,
    "resolve_domain": _render_domain,
    "check_dataset": _render_check,
}
