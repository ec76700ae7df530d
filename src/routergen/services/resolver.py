"""PackageMetadataResolver — read ``[package]`` name/version of each handler crate.

INVARIANT: resolution is atomic. The first unreadable crate aborts the
whole run and no partial list is returned.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from routergen.domain.errors import ResolutionError
from routergen.domain.models import DependencySpec, PackageDescriptor, ResolvedDependency
from routergen.services.base import BaseStage

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

CRATE_MANIFEST = "Cargo.toml"


def read_package_descriptor(crate_dir: Path) -> PackageDescriptor:
    """Return the ``[package]`` name and version declared in *crate_dir*.

    Workspace-inherited values (``version.workspace = true``) are not
    followed and count as missing.
    """
    manifest = crate_dir / CRATE_MANIFEST
    try:
        raw = manifest.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read {manifest}: {exc.strerror or exc}"
        raise ResolutionError(msg, detail={"manifest": str(manifest)}) from exc
    except UnicodeDecodeError as exc:
        msg = f"{manifest} is not valid UTF-8: {exc.reason} at byte {exc.start}"
        raise ResolutionError(msg, detail={"manifest": str(manifest)}) from exc

    try:
        data: dict[str, Any] = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {manifest}: {exc}"
        raise ResolutionError(msg, detail={"manifest": str(manifest)}) from exc

    package = data.get("package")
    if not isinstance(package, dict):
        msg = f"{manifest} has no [package] table"
        raise ResolutionError(msg, detail={"manifest": str(manifest)})

    fields: dict[str, str] = {}
    for key in ("name", "version"):
        value = package.get(key)
        if not isinstance(value, str):
            msg = f"{manifest} has no string package.{key}"
            raise ResolutionError(msg, detail={"manifest": str(manifest), "field": key})
        fields[key] = value
    return PackageDescriptor(**fields)


class PackageMetadataResolver(BaseStage):
    """Pairs each spec with the descriptor found at ``spec.path``."""

    stage_name = "resolve"

    def __init__(self, base_dir: Path, log: BoundLogger | None = None) -> None:
        super().__init__(log)
        self._base_dir = base_dir

    def crate_dir(self, spec: DependencySpec) -> Path:
        return self._base_dir / spec.path

    def resolve(self, specs: list[DependencySpec]) -> list[ResolvedDependency]:
        resolved: list[ResolvedDependency] = []
        for spec in specs:
            try:
                descriptor = read_package_descriptor(self.crate_dir(spec))
            except ResolutionError as exc:
                exc.detail.setdefault("dependency", spec.path)
                exc.detail.setdefault("ns", spec.namespace)
                self._log.debug("resolution failed", dependency=spec.path, error=exc.message)
                raise
            self._log.debug(
                "dependency resolved",
                dependency=spec.path,
                package=descriptor.name,
                version=descriptor.version,
            )
            resolved.append(ResolvedDependency(spec=spec, descriptor=descriptor))
        return resolved
