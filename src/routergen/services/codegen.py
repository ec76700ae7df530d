"""CodeGenerator — render the router crate's Cargo.toml and src/main.rs.

Rendering is a pure function of the canonical DependencySet and the
program/router config: the same inputs always produce byte-identical
text, whatever order the specs were originally listed in. Aliases
(``dep0``, ``dep1``, ...) are the 0-based canonical positions.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import TemplateError

from routergen.domain.errors import FormatError
from routergen.infrastructure.templates import build_template_environment
from routergen.services.base import BaseStage

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from routergen.config.models import ProgramConfig, RouterConfig
    from routergen.domain.models import DependencySet

MANIFEST_PATH = Path("Cargo.toml")
ENTRY_POINT_PATH = Path("src") / "main.rs"

_MANIFEST_TEMPLATE = "Cargo.toml.j2"
_ENTRY_POINT_TEMPLATE = "main.rs.j2"


@dataclass(frozen=True)
class GeneratedArtifacts:
    manifest: str
    entry_point: str

    def files(self) -> list[tuple[Path, str]]:
        """``(relative path, content)`` pairs in write order."""
        return [(MANIFEST_PATH, self.manifest), (ENTRY_POINT_PATH, self.entry_point)]


def template_context(dep_set: DependencySet) -> list[dict[str, Any]]:
    """Flatten the set into the per-dependency rows the templates iterate."""
    return [
        {
            "alias": alias,
            "package": dep.descriptor.name,
            "path": dep.spec.path,
            "handler": dep.spec.handler,
            "namespace": dep.spec.namespace,
        }
        for alias, dep in dep_set.iter_aliased()
    ]


class CodeGenerator(BaseStage):
    """Renders :class:`GeneratedArtifacts` from a canonical DependencySet."""

    stage_name = "generate"

    def __init__(
        self,
        program: ProgramConfig,
        router: RouterConfig,
        *,
        project_root: Path | None = None,
        log: BoundLogger | None = None,
    ) -> None:
        super().__init__(log)
        self._program = program
        self._router = router
        self._env = build_template_environment("crate", project_root=project_root)

    def render_manifest(self, dep_set: DependencySet) -> str:
        template = self._env.get_template(_MANIFEST_TEMPLATE)
        return template.render(
            program=self._program,
            router=self._router,
            deps=template_context(dep_set),
        )

    def render_entry_point(self, dep_set: DependencySet) -> str:
        template = self._env.get_template(_ENTRY_POINT_TEMPLATE)
        return template.render(deps=template_context(dep_set))

    def render(self, dep_set: DependencySet) -> GeneratedArtifacts:
        try:
            artifacts = GeneratedArtifacts(
                manifest=self.render_manifest(dep_set),
                entry_point=self.render_entry_point(dep_set),
            )
        except TemplateError as exc:
            msg = f"Cannot render crate templates: {exc}"
            raise FormatError(msg, detail={"template_error": type(exc).__name__}) from exc
        self._log.debug(
            "artifacts rendered",
            count=len(dep_set),
            aliases=[alias for alias, _ in dep_set.iter_aliased()],
        )
        return artifacts
