"""Command: report whether a change-checked build would rebuild."""

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
  routergen status ./router
  routergen -v status ./router --deps handlers.json""",
)
@click.argument("target_dir", type=click.Path(file_okay=False, path_type=Path))
@deps_options
@click.pass_obj
def status(app: AppContext, target_dir: Path, deps_file: str | None, deps_json: str | None) -> None:
    """Compare the resolved dependencies with TARGET_DIR's last successful build."""
    app.emit(app.service().status(target_dir, app.spec_source(deps_file, deps_json)))
