"""Command: regenerate and rebuild the router crate."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from routergen.commands._base import RouterGenCommand, deps_options

if TYPE_CHECKING:
    from routergen.commands._context import AppContext


@click.command(
    cls=RouterGenCommand,
    examples="""\
  routergen build ./router
  routergen build ./router true
  routergen build ./router true --deps handlers.json
  routergen build ./router false --deps-json '[{"path": "../buffers", "handler": "Handler", "ns": "buffers"}]'
  routergen --json build ./router true""",
)
@click.argument("target_dir", type=click.Path(file_okay=False, path_type=Path))
@click.argument("check_changes", required=False, default="false")
@deps_options
@click.pass_obj
def build(
    app: AppContext,
    target_dir: Path,
    check_changes: str,
    deps_file: str | None,
    deps_json: str | None,
) -> None:
    """Generate the router crate in TARGET_DIR and build it.

    CHECK_CHANGES set to the literal "true" skips everything when the
    resolved dependencies match the last successful build. A failing build
    command still exits 0; it only withholds the snapshot update.
    """
    source = app.spec_source(deps_file, deps_json)
    app.emit(app.service().build(target_dir, source, check_changes=check_changes == "true"))
