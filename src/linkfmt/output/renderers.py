"""Human-readable rendering of ServiceResult, one renderer per operation.

:func:`render_result` picks a renderer by ``result.op``, draws on a
string-backed console from :mod:`linkfmt.output.console` and returns the
captured text. Operations without a dedicated renderer print their data
as ``key: value`` lines.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from linkfmt.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from linkfmt.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Text for *result*; *verbose* adds replacements and error details.

    Styles only turn into ANSI codes when the output is a terminal.
    """
    console = create_console()
    if not result.ok:
        _render_error(result, console, verbose=verbose)
    else:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One item per line for ``--quiet``: touched paths or link texts."""
    if result.error is not None:
        return f"ERROR: {result.op} — {result.error.message}"
    if not result.ok:
        return f"ERROR: {result.op}"

    data = result.data
    if result.op == "convert":
        return "\n".join(data.get("written") or [f["path"] for f in data.get("files", [])])
    if result.op == "list_links":
        return "\n".join(str(item["text"]) for item in data.get("items", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="lf.ok"), Text(f"  {result.op}", style="lf.op"), sep="")


def _field(console: Console, key: str, value: Any) -> None:
    console.print(
        Text(f"  {key}: ", style="lf.key"),
        Text(str(value), style="lf.path" if key == "path" else ""),
        sep="",
    )


def _render_changes(console: Console, changes: list[dict[str, Any]], indent: str = "    ") -> None:
    for change in changes:
        console.print(
            f"{indent}{change['line']:>4}  "
            f"[lf.old]{escape(str(change['old']))}[/lf.old] → "
            f"[lf.new]{escape(str(change['new']))}[/lf.new]"
        )


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    error = result.error
    console.print(
        Text("ERROR", style="lf.error"),
        Text(f"  {result.op}", style="lf.op"),
        Text(f" — {error.message if error else 'failed'}"),
        sep="",
    )
    if verbose and error and error.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in error.detail.items():
            console.print(Text(f"    {key}: {value}"))


# ── Conversion renderers ──────────────────────────────────────────────


def _render_convert(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render workspace conversion: per-file changes and totals."""
    _status_line(console, result)
    d = result.data
    for key in ("format", "documents", "converted", "failed"):
        _field(console, key, d.get(key, 0))

    for item in d.get("files", []):
        console.print()
        console.print(
            f"  [lf.path]{escape(str(item['path']))}[/lf.path]"
            f"  ({item['converted']} converted, {item['failed']} failed)"
        )
        if verbose:
            _render_changes(console, item.get("replacements", []))

    if d.get("dry_run") and d.get("converted"):
        console.print()
        console.print("  [dim]dry run — pass --write to save changes[/dim]")
    elif d.get("written"):
        console.print()
        _field(console, "written", len(d["written"]))


def _render_convert_document(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render a single document conversion with every replacement."""
    _status_line(console, result)
    d = result.data
    for key in ("path", "format", "converted", "already", "unresolved"):
        _field(console, key, d.get(key, 0))
    _field(console, "failed", len(d.get("failed", [])))
    _render_changes(console, d.get("replacements", []), indent="  ")


# ── Query renderers ───────────────────────────────────────────────────


def _render_links(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_links results as a table titled with the note's title."""
    items = result.data.get("items", [])
    if not items:
        console.print("No links found.")
        return

    title = result.data.get("title")
    table = Table(
        title=escape(str(title)) if title else None,
        show_header=True,
        show_lines=False,
        pad_edge=False,
        expand=False,
    )
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Type")
    table.add_column("Link", no_wrap=True)
    table.add_column("Status")
    if verbose:
        table.add_column("Resolved", style="lf.path")

    for item in items:
        status = str(item.get("status", ""))
        style = style_for_status(status)
        row = [
            str(item.get("line", "")),
            str(item.get("type", "")),
            escape(str(item.get("text", ""))),
            f"[{style}]{status}[/{style}]" if style else status,
        ]
        if verbose:
            row.append(escape(str(item.get("resolved") or "")))
        table.add_row(*row)

    console.print(table)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS = {
    "convert": _render_convert,
    "convert_document": _render_convert_document,
    "list_links": _render_links,
}
