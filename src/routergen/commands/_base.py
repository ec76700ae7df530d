"""Click base classes with --examples support.

``RouterGenCommand`` accepts an ``examples`` string. Passing ``--examples``
prints it and exits, keeping ``--help`` short.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class RouterGenCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def deps_options(func: Any) -> Any:
    """Add the mutually exclusive ``--deps`` / ``--deps-json`` options."""
    func = click.option(
        "--deps-json",
        "deps_json",
        default=None,
        metavar="TEXT",
        help="Inline JSON dependency list (instead of a file).",
    )(func)
    func = click.option(
        "--deps",
        "deps_file",
        default=None,
        type=click.Path(dir_okay=False, path_type=str),
        help="Dependency list file (default: build.deps_file, usually deps.json).",
    )(func)
    return func
