"""Plain helper functions shared by test modules (importable, unlike conftest)."""

from __future__ import annotations

import json
import sys
from pathlib import Path


def fake_build_command(log_path: Path, exit_code: int = 0) -> list[str]:
    """A build command that records its working directory, then exits."""
    script = "\n".join(
        [
            "import pathlib, sys",
            f"log = pathlib.Path({str(log_path)!r})",
            "with log.open('a', encoding='utf-8') as fh:",
            "    fh.write(str(pathlib.Path.cwd()) + '\\n')",
            "sys.stderr.write('error[E0432]: unresolved import\\n')" if exit_code else "pass",
            f"sys.exit({exit_code})",
        ]
    )
    return [sys.executable, "-c", script]


def invocation_count(log_path: Path) -> int:
    """How many times the fake build command ran."""
    if not log_path.exists():
        return 0
    return len(log_path.read_text(encoding="utf-8").splitlines())


def deps_json(*records: tuple[Path | str, str, str]) -> str:
    """Serialize ``(path, handler, ns)`` triples into a deps.json document."""
    return json.dumps(
        [{"path": str(path), "handler": handler, "ns": ns} for path, handler, ns in records]
    )


def write_config(root: Path, command: list[str], extra: str = "") -> Path:
    """Write a routergen.toml whose [build] command is *command*."""
    from routergen.infrastructure.templates import toml_array

    path = root / "routergen.toml"
    path.write_text(f"[build]\ncommand = {toml_array(command)}\n{extra}", encoding="utf-8")
    return path
