"""RouterBuildService — LOAD → RESOLVE → DETECT → GENERATE → BUILD → SNAPSHOT.

The only service the CLI talks to. Stage errors become a failed
ServiceResult; a build command that exits non-zero is a successful
invocation whose ``status`` is ``"build_failed"`` and whose snapshot was
not advanced.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from routergen.domain.errors import RouterGenError
from routergen.services.build import BuildInvoker
from routergen.services.codegen import CodeGenerator
from routergen.services.loader import DependencySpecLoader, SpecSource
from routergen.services.resolver import PackageMetadataResolver
from routergen.services.result import ServiceResult
from routergen.services.snapshot import ChangeDetector, SnapshotStore

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from routergen.config.settings import RouterGenSettings
    from routergen.domain.models import DependencySet, ResolvedDependency


def describe(dep_set: DependencySet) -> list[dict[str, str]]:
    """JSON-friendly rows for result payloads, in canonical order."""
    return [
        {
            "alias": alias,
            "ns": dep.spec.namespace,
            "package": dep.descriptor.name,
            "version": dep.descriptor.version,
            "path": dep.spec.path,
            "handler": dep.spec.handler,
        }
        for alias, dep in dep_set.iter_aliased()
    ]


class RouterBuildService:
    """Runs the generation pipeline for one target directory.

    One bound logger is created per service and handed to every stage.
    """

    def __init__(self, settings: RouterGenSettings, log: BoundLogger | None = None) -> None:
        self._settings = settings
        self._log = log if log is not None else structlog.get_logger("routergen.pipeline")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def build(self, target_dir: Path, source: SpecSource, *, check_changes: bool) -> ServiceResult:
        """Regenerate and rebuild the router crate unless nothing changed."""
        op = "build"
        log = self._log.bind(op=op, target=str(target_dir))
        warnings: list[str] = []
        started = time.perf_counter()

        store = SnapshotStore(target_dir, self._settings.build.snapshot_file, log=log)
        try:
            resolved = self._load_and_resolve(source, log)
            report = self._detector(store, log).detect(resolved, check_changes=check_changes)
            warnings.extend(self._duplicate_warnings(report.duplicates))

            data: dict[str, Any] = {
                "target": str(target_dir),
                "dependencies": describe(report.current),
                "check_changes": check_changes,
            }
            if not report.changed:
                log.info("dependencies unchanged, skipping build", count=len(report.current))
                return self._finish(op, "skipped", data, warnings, started)

            artifacts = self._generator(log).render(report.current)
            invoker = BuildInvoker(target_dir, self._settings.build.command, log=log)
            written = invoker.write_artifacts(artifacts)
            data["files"] = [str(p) for p in written]

            outcome = invoker.run()
            data["command"] = outcome.command
            data["returncode"] = outcome.returncode
            data["build_ms"] = outcome.duration_ms
            if not outcome.succeeded:
                data["stderr_tail"] = outcome.stderr_tail()
                warnings.append(
                    f"Build command exited with status {outcome.returncode}; "
                    "snapshot not updated, the next run will rebuild"
                )
                return self._finish(op, "build_failed", data, warnings, started)

            store.write(report.current)
            data["snapshot"] = str(store.path)
            return self._finish(op, "built", data, warnings, started)
        except RouterGenError as exc:
            log.debug("build pipeline failed", code=exc.code, error=exc.message)
            return ServiceResult.failure(op, exc, warnings=warnings)

    def render(self, source: SpecSource) -> ServiceResult:
        """Render the crate files without writing or building anything."""
        op = "render"
        log = self._log.bind(op=op)
        warnings: list[str] = []
        try:
            resolved = self._load_and_resolve(source, log)
            dep_set = self._detector(None, log).canonicalize(resolved)
            warnings.extend(self._duplicate_warnings(dep_set.duplicate_namespaces()))
            artifacts = self._generator(log).render(dep_set)
        except RouterGenError as exc:
            log.debug("render failed", code=exc.code, error=exc.message)
            return ServiceResult.failure(op, exc, warnings=warnings)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "dependencies": describe(dep_set),
                "manifest": artifacts.manifest,
                "entry_point": artifacts.entry_point,
            },
            warnings=warnings,
        )

    def status(self, target_dir: Path, source: SpecSource) -> ServiceResult:
        """Report whether ``build`` with change checking would rebuild."""
        op = "status"
        log = self._log.bind(op=op, target=str(target_dir))
        store = SnapshotStore(target_dir, self._settings.build.snapshot_file, log=log)
        try:
            resolved = self._load_and_resolve(source, log)
            report = self._detector(store, log).detect(resolved, check_changes=True)
        except RouterGenError as exc:
            log.debug("status failed", code=exc.code, error=exc.message)
            return ServiceResult.failure(op, exc)

        previous = report.previous
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "target": str(target_dir),
                "snapshot": str(store.path),
                "has_snapshot": previous is not None,
                "changed": report.changed,
                "current": describe(report.current),
                "previous": describe(previous) if previous is not None else [],
            },
            warnings=self._duplicate_warnings(report.duplicates),
        )

    # ------------------------------------------------------------------
    # Stage wiring
    # ------------------------------------------------------------------

    def _load_and_resolve(self, source: SpecSource, log: BoundLogger) -> list[ResolvedDependency]:
        specs = DependencySpecLoader(log).load(source)
        return PackageMetadataResolver(source.base_dir, log=log).resolve(specs)

    def _detector(self, store: SnapshotStore | None, log: BoundLogger) -> ChangeDetector:
        return ChangeDetector(
            store,
            allow_duplicate_namespaces=self._settings.generate.allow_duplicate_namespaces,
            log=log,
        )

    def _generator(self, log: BoundLogger) -> CodeGenerator:
        return CodeGenerator(
            self._settings.program,
            self._settings.router,
            project_root=self._settings.project_root,
            log=log,
        )

    @staticmethod
    def _duplicate_warnings(duplicates: list[str]) -> list[str]:
        return [f"Namespace {ns!r} is served by more than one handler" for ns in duplicates]

    @staticmethod
    def _finish(
        op: str,
        status: str,
        data: dict[str, Any],
        warnings: list[str],
        started: float,
    ) -> ServiceResult:
        return ServiceResult(
            ok=True,
            op=op,
            data={"status": status, **data},
            warnings=warnings,
            meta={"duration_ms": round((time.perf_counter() - started) * 1000, 2)},
        )
