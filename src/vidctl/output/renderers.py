"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from vidctl.output.console import completion_style, create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from vidctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "aspect_progress":
        return f"{result.data['completedFieldCount']}/{result.data['fieldCount']}"

    # Aspect lists print keys, field lists print field keys
    aspects = result.data.get("aspects")
    if isinstance(aspects, list):
        return "\n".join(str(a.get("key", "")) for a in aspects)
    fields = result.data.get("fields")
    if isinstance(fields, list):
        return "\n".join(str(f.get("key", "")) for f in fields)

    for flag in ("complete", "valid"):
        if flag in result.data:
            return "yes" if result.data[flag] else "no"

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="vid.ok")
    op = Text(f"  {result.op}", style="vid.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any, style: str = "") -> None:
    """Print a single indented key-value field."""
    line = Text(f"  {key}: ", style="vid.key")
    if isinstance(value, (dict, list)):
        value = _json.dumps(value, separators=(",", ":"))
    line.append(str(value), style=style)
    console.print(line)


def _flag(console: Console, key: str, flag: bool) -> None:
    """Print a yes/no field colored by completion state."""
    line = Text(f"  {key}: ", style="vid.key")
    line.append("yes" if flag else "no", style=completion_style(flag))
    console.print(line)


def _field_table(fields: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    """Build a Rich Table of field descriptors."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right")
    table.add_column("Key", style="vid.field", no_wrap=True)
    table.add_column("Name")
    table.add_column("Type", style="vid.type")
    table.add_column("Req")
    table.add_column("Criterion")
    if verbose:
        table.add_column("Path", style="dim")
        table.add_column("Description", style="dim")

    for f in fields:
        row: list[Any] = [
            str(f.get("order", "")),
            str(f.get("key", "")),
            str(f.get("displayName", "")),
            str(f.get("type", "")),
            "yes" if f.get("required") else "",
            str(f.get("completionCriterion", "")),
        ]
        if verbose:
            row.append(str(f.get("propertyPath", "")))
            row.append(str(f.get("description", "")))
        table.add_row(*row)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="vid.error")
    op = Text(f"  {result.op}", style="vid.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Metadata renderers ────────────────────────────────────────────────


def _render_overview(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render aspects_overview as one row per aspect."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right")
    table.add_column("Key", style="vid.aspect", no_wrap=True)
    table.add_column("Title")
    table.add_column("Fields", justify="right")
    if verbose:
        table.add_column("Icon", style="dim")
        table.add_column("Endpoint", style="dim")

    aspects = result.data.get("aspects", [])
    for a in aspects:
        row = [str(a["order"]), str(a["key"]), str(a["title"]), str(a["fieldCount"])]
        if verbose:
            row.extend([str(a["icon"]), str(a["endpoint"])])
        table.add_row(*row)
    console.print(table)
    console.print(f"\n{len(aspects)} aspects")


def _render_full_aspects(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render full_aspects as one field table per aspect."""
    for a in result.data.get("aspects", []):
        heading = Text(f"{a['order']}. {a['title']} ", style="vid.aspect")
        heading.append(f"({a['key']})", style="dim")
        console.print(heading)
        if verbose:
            console.print(Text(f"  {a['description']}", style="dim"))
        console.print(_field_table(a.get("fields", []), verbose=verbose))
        console.print()


def _render_aspect_fields(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render aspect_fields as a titled field table."""
    d = result.data
    heading = Text(str(d.get("aspectTitle", "")), style="vid.aspect")
    heading.append(f"  ({d.get('aspectKey', '')})", style="dim")
    console.print(heading)
    fields = d.get("fields", [])
    console.print(_field_table(fields, verbose=verbose))
    console.print(f"\n{len(fields)} fields")


def _render_criterion(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "field", f"{d['aspectKey']}/{d['fieldKey']}", style="vid.field")
    _field(console, "criterion", d["criterion"])


# ── Record renderers ──────────────────────────────────────────────────


def _render_field_complete(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "field", f"{d['aspectKey']}/{d['fieldKey']}", style="vid.field")
    _field(console, "criterion", d["criterion"])
    if verbose:
        _field(console, "path", d["propertyPath"], style="dim")
        _field(console, "value", d.get("value"))
    _flag(console, "complete", bool(d["complete"]))


def _render_progress(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render aspect_progress with per-aspect counts, and per-field marks when verbose."""
    d = result.data
    title = d.get("video") or "video"
    table = Table(title=str(title), show_header=True, pad_edge=False, expand=False)
    table.add_column("#", justify="right")
    table.add_column("Aspect", style="vid.aspect", no_wrap=True)
    table.add_column("Done", justify="right")
    table.add_column("Progress", justify="right")

    for a in d.get("aspects", []):
        total = a["fieldCount"]
        done = a["completedFieldCount"]
        pct = f"{(100 * done // total) if total else 100}%"
        style = completion_style(done == total)
        table.add_row(str(a["order"]), str(a["title"]), Text(f"{done}/{total}", style=style), pct)
    console.print(table)

    if verbose:
        for a in d.get("aspects", []):
            console.print()
            console.print(Text(str(a["title"]), style="vid.aspect"))
            for f in a.get("fields", []):
                mark = "✓" if f["complete"] else "✗"
                line = Text(f"  {mark} ", style=completion_style(f["complete"]))
                line.append(str(f["displayName"]))
                line.append(f"  [{f['criterion']}]", style="dim")
                console.print(line)

    console.print(f"\n{d['completedFieldCount']}/{d['fieldCount']} fields complete")


def _render_validation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "field", f"{d['aspectKey']}/{d['fieldKey']}", style="vid.field")
    _field(console, "type", d["fieldType"], style="vid.type")
    _flag(console, "valid", bool(d["valid"]))
    violation = d.get("violation")
    if violation:
        _field(console, "violation", f"{violation['kind']}: {violation['message']}")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Metadata
    "aspects_overview": _render_overview,
    "full_aspects": _render_full_aspects,
    "aspect_fields": _render_aspect_fields,
    "completion_criterion": _render_criterion,
    # Record
    "is_field_complete": _render_field_complete,
    "aspect_progress": _render_progress,
    "validate_field": _render_validation,
}
