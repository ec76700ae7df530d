"""Root CLI group for routergen with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from routergen import __version__
from routergen.commands import register_commands
from routergen.commands._context import AppContext
from routergen.config.settings import RouterGenSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="routergen")
@click.option(
    "--json", "json_output", is_flag=True, help="Print the result as a JSON ServiceResult payload."
)
@click.option(
    "-q", "--quiet", is_flag=True, help="Minimal output: the build status or an OK/ERROR line."
)
@click.option(
    "-v", "--verbose", is_flag=True, help="Show files and timings, and debug logs on stderr."
)
@click.option("--log-json", is_flag=True, help="Emit stderr diagnostics as JSON lines.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Append JSON diagnostic logs to this file.",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Use this routergen.toml instead of searching upward.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    log_file: Path | None,
    config_path: str | None,
) -> None:
    """routergen: build one Neovim RPC router binary from many handler crates.

    Reads a JSON list of handler crates (deps.json by default), resolves
    each crate's package name and version, and generates a dispatcher
    crate that routes requests by namespace. `build` writes Cargo.toml and
    src/main.rs into TARGET_DIR and runs the configured build command
    there. With CHECK_CHANGES set to "true", an unchanged dependency set
    skips both steps. `render` previews the generated files and `status`
    reports whether a build would rebuild.

    Settings are read from routergen.toml (found by walking up from the
    working directory) and ROUTERGEN_* environment variables; the flags
    below take precedence.
    """
    settings = RouterGenSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        log_file=log_file,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
