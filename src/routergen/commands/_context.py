"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Configures logging exactly once, owns the diagnostic
logger handed to the pipeline, and centralizes result emission.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click
import structlog

from routergen.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from routergen.config.settings import RouterGenSettings
    from routergen.services.loader import SpecSource
    from routergen.services.pipeline import RouterBuildService
    from routergen.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: RouterGenSettings) -> None:
        self.settings = settings

        from routergen.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            log_file=settings.log_file,
        )
        self.log: BoundLogger = structlog.get_logger("routergen.pipeline")

    def service(self) -> RouterBuildService:
        from routergen.services.pipeline import RouterBuildService

        return RouterBuildService(self.settings, log=self.log)

    def spec_source(self, deps_file: str | None, deps_json: str | None) -> SpecSource:
        """Pick the dependency source from ``--deps`` / ``--deps-json``.

        An explicit ``--deps`` path is taken as given (relative to the
        working directory); the configured default resolves against the
        project root. Inline specs resolve dependency paths against the
        working directory.
        """
        from routergen.services.loader import SpecSource

        if deps_file and deps_json is not None:
            raise click.UsageError("--deps and --deps-json are mutually exclusive.")
        if deps_json is not None:
            return SpecSource.inline(deps_json)
        if deps_file:
            return SpecSource.from_file(Path(deps_file))
        return SpecSource.from_file(self.settings.project_root / self.settings.build.deps_file)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout, warnings to stderr (outside JSON mode).
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
