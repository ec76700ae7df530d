"""Jinja2 template loading for the generated crate, with per-project overrides."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
)

from routergen.domain.escaping import escape_rust, toml_string

OVERRIDE_DIR = Path(".routergen") / "templates"


def toml_array(values: Iterable[str]) -> str:
    """Render strings as an inline TOML array."""
    return "[" + ", ".join(toml_string(v) for v in values) + "]"


def build_template_environment(group: str, *, project_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    Overrides are loaded from ``.routergen/templates/<group>/`` under the
    project root. Undefined variables are errors so a broken override
    fails loudly instead of emitting an empty string into Rust source.
    """
    loaders: list[BaseLoader] = []
    if project_root is not None:
        loaders.append(FileSystemLoader(str(project_root / OVERRIDE_DIR / group)))

    loaders.append(PackageLoader("routergen", f"templates/{group}"))
    env = Environment(
        loader=ChoiceLoader(loaders),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
    )
    env.filters["rust_str"] = escape_rust
    env.filters["toml_str"] = toml_string
    env.filters["toml_array"] = toml_array
    return env
