"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Every op a service produces has a renderer; errors share one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from optmark.output.console import create_console, get_output, style_for_case

if TYPE_CHECKING:
    from rich.console import Console

    from optmark.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        _OP_RENDERERS[result.op](result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "check":
        return str(result.data.get("count", 0))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="opt.ok")
    op = Text(f"  {result.op}", style="opt.op")
    console.print(label, op, sep="")


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="opt.key")
    console.print(k, Text(str(value)), sep="")


def _location(issue: dict[str, Any]) -> str:
    variant = issue.get("variant")
    field = str(issue.get("field", ""))
    return f"{variant}.{field}" if variant else field


def _render_diagnostics(console: Console, issues: list[dict[str, Any]]) -> None:
    for issue in issues:
        code = str(issue.get("code", "conflict"))
        console.print(
            Text(f"  {code}", style="opt.error"),
            Text(f" [{_location(issue)}]", style="opt.field"),
            Text(f": {issue.get('message', '')}"),
            sep="",
        )


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="opt.error")
    op = Text(f"  {result.op}", style="opt.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if err is None:
        return
    # Diagnostics are the point of a failed transform; always list them.
    _render_diagnostics(console, result.diagnostics)
    if verbose:
        for k, v in err.detail.items():
            if k != "diagnostics":
                console.print(Text(f"    {k}: {v}"))


def _render_transform(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the rewritten attributes of every field as a table."""
    _status_line(console, result)
    _field(console, "name", result.data.get("name", ""))
    _field(console, "kind", result.data.get("kind", ""))

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Field", style="opt.field")
    table.add_column("Case")
    table.add_column("Attributes", style="opt.attr", overflow="fold")
    for row in result.data.get("fields", []):
        name = row["name"] if row.get("variant") is None else f"{row['variant']}.{row['name']}"
        case = str(row.get("case", ""))
        attrs = "\n".join(row.get("attributes", [])) or "-"
        table.add_row(Text(name), Text(case, style=style_for_case(case)), Text(attrs))
    console.print(table)

    if verbose:
        _render_meta(console, result)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render check results, one line per diagnostic."""
    issues = result.data.get("issues", [])
    count = result.data.get("count", len(issues))

    if count == 0:
        console.print("[opt.ok]OK[/opt.ok]  No issues found.")
        return

    console.print(Text(str(result.data.get("name", "")), style="bold"))
    _render_diagnostics(console, issues)
    if verbose:
        for issue in issues:
            elements = ", ".join(issue.get("elements", []))
            if elements:
                console.print(Text(f"    {_location(issue)}: {elements}"))
    console.print(f"\n{count} issue(s)")


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "transform": _render_transform,
    "check": _render_check,
}
