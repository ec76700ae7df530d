"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from routergen.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from routergen.services.result import ServiceResult


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
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    status = result.data.get("status")
    if status:
        return str(status)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult, status: str | None = None) -> None:
    label = Text("OK", style="rg.ok")
    op = Text(f"  {result.op}", style="rg.op")
    if status:
        console.print(label, op, Text(f"  {status}", style=style_for_status(status)))
    else:
        console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="rg.key")
    style = "rg.path" if key in ("target", "snapshot", "path") else ""
    console.print(k, Text(str(value), style=style), sep="")


def _dependency_table(rows: list[dict[str, str]], title: str | None = None) -> Table:
    table = Table(title=title, show_edge=False, pad_edge=False)
    table.add_column("alias", style="rg.alias")
    table.add_column("ns", style="rg.ns")
    table.add_column("package")
    table.add_column("version")
    table.add_column("path", style="rg.path")
    table.add_column("handler")
    for row in rows:
        table.add_row(
            row["alias"], row["ns"], row["package"], row["version"], row["path"], row["handler"]
        )
    return table


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}", markup=False)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="rg.error")
    op = Text(f"  {result.op}: ", style="rg.op")
    console.print(label, op, Text(msg), sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}", markup=False)


# ── Operation renderers ───────────────────────────────────────────────


def _render_build(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result, data.get("status"))
    _field(console, "target", data.get("target", ""))
    rows = data.get("dependencies", [])
    if rows:
        console.print(_dependency_table(rows))
    else:
        _field(console, "dependencies", "none")
    if "returncode" in data:
        _field(console, "returncode", data["returncode"])
    if data.get("stderr_tail"):
        console.print(Text("  build stderr (tail):", style="rg.warning"))
        console.out(data["stderr_tail"], highlight=False)
    if verbose:
        for key in ("files", "command", "snapshot", "build_ms"):
            if key in data:
                _field(console, key, data[key])
        _render_meta(console, result)


def _render_status(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result, "changed" if data.get("changed") else "up to date")
    _field(console, "target", data.get("target", ""))
    _field(console, "snapshot", data.get("snapshot", ""))
    _field(console, "has_snapshot", data.get("has_snapshot", False))
    if data.get("current"):
        console.print(_dependency_table(data["current"], title="current"))
    if verbose and data.get("previous"):
        console.print(_dependency_table(data["previous"], title="last successful build"))


def _render_render(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    console.print(Text("# Cargo.toml", style="rg.key"))
    console.out(data.get("manifest", ""), highlight=False)
    console.print(Text("// src/main.rs", style="rg.key"))
    console.out(data.get("entry_point", ""), highlight=False, end="")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "build": _render_build,
    "status": _render_status,
    "render": _render_render,
}
