"""Subcommand modules for routergen.

Provides register_commands() which uses deferred imports to keep
``routergen --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from routergen.commands.build import build
    from routergen.commands.render import render
    from routergen.commands.status import status

    cli.add_command(build)
    cli.add_command(render)
    cli.add_command(status)
