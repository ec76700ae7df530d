"""Command: print the generated crate files without building."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from routergen.commands._base import RouterGenCommand, deps_options

if TYPE_CHECKING:
    from routergen.commands._context import AppContext


@click.command(
    cls=RouterGenCommand,
    examples="""\
  routergen render
  routergen render --part manifest
  routergen render --part main --deps handlers.json
  routergen --json render""",
)
@click.option(
    "--part",
    type=click.Choice(["all", "manifest", "main"]),
    default="all",
    help="Which generated file to print.",
)
@deps_options
@click.pass_obj
def render(app: AppContext, part: str, deps_file: str | None, deps_json: str | None) -> None:
    """Render Cargo.toml and src/main.rs to stdout."""
    result = app.service().render(app.spec_source(deps_file, deps_json))
    if result.ok and part != "all" and not app.settings.json_output:
        key = "manifest" if part == "manifest" else "entry_point"
        click.echo(result.data[key], nl=False)
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
        return
    app.emit(result)
