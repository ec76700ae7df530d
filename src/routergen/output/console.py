"""Rich Console factory and theme for routergen output.

Consoles render into a StringIO buffer so every renderer keeps the
``format_result() -> str`` contract. Outside a terminal (tests, pipes)
Rich emits no color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ROUTERGEN_THEME = Theme(
    {
        "rg.ok": "bold green",
        "rg.error": "bold red",
        "rg.warning": "bold yellow",
        "rg.op": "bold cyan",
        "rg.key": "dim",
        "rg.alias": "bold blue",
        "rg.ns": "magenta",
        "rg.path": "dim",
        "rg.status.built": "green",
        "rg.status.skipped": "cyan",
        "rg.status.build_failed": "bold yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=ROUTERGEN_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Rich style name for a build status."""
    return f"rg.status.{status}" if status in ("built", "skipped", "build_failed") else ""
