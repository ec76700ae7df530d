"""Snapshot persistence and change detection.

The snapshot is the canonical DependencySet of the last *successful*
build, stored as ``last-deps.json`` inside the target directory.

INVARIANT: only a successful build writes the snapshot. A failed build
leaves the previous one in place, so an identical retry still rebuilds.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from routergen.domain.errors import DuplicateNamespaceError, FileAccessError
from routergen.domain.models import DependencySet, ResolvedDependency
from routergen.services.base import BaseStage

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

DEFAULT_SNAPSHOT_FILE = "last-deps.json"


class SnapshotStore(BaseStage):
    """Reads and writes the snapshot file of one target directory."""

    stage_name = "snapshot"

    def __init__(
        self,
        target_dir: Path,
        filename: str = DEFAULT_SNAPSHOT_FILE,
        log: BoundLogger | None = None,
    ) -> None:
        super().__init__(log)
        self.path = target_dir / filename

    def read(self) -> DependencySet | None:
        """Return the stored set, or None when absent or unusable."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            self._log.debug("no previous snapshot", path=str(self.path))
            return None
        try:
            return DependencySet.from_json(raw)
        except ValidationError as exc:
            self._log.debug(
                "ignoring malformed snapshot", path=str(self.path), errors=exc.error_count()
            )
            return None

    def write(self, dep_set: DependencySet) -> None:
        try:
            self.path.write_text(dep_set.to_json(), encoding="utf-8")
        except OSError as exc:
            msg = f"Cannot write snapshot {self.path}: {exc.strerror or exc}"
            raise FileAccessError(msg, detail={"path": str(self.path)}) from exc
        self._log.debug("snapshot written", path=str(self.path), count=len(dep_set))


@dataclass(frozen=True)
class ChangeReport:
    current: DependencySet
    previous: DependencySet | None
    checked: bool
    duplicates: list[str]

    @property
    def changed(self) -> bool:
        if not self.checked:
            return True
        return self.previous != self.current


class ChangeDetector(BaseStage):
    """Canonicalizes resolved dependencies and compares them with the snapshot."""

    stage_name = "detect"

    def __init__(
        self,
        store: SnapshotStore | None = None,
        *,
        allow_duplicate_namespaces: bool = False,
        log: BoundLogger | None = None,
    ) -> None:
        super().__init__(log)
        self._store = store
        self._allow_duplicates = allow_duplicate_namespaces

    def canonicalize(self, resolved: list[ResolvedDependency]) -> DependencySet:
        """Stable sort on namespace; reject duplicates unless allowed."""
        dep_set = DependencySet.canonical(resolved)
        duplicates = dep_set.duplicate_namespaces()
        if duplicates and not self._allow_duplicates:
            msg = f"Namespace claimed by more than one dependency: {', '.join(duplicates)}"
            raise DuplicateNamespaceError(msg, detail={"namespaces": duplicates})
        if duplicates:
            self._log.warning("duplicate namespaces kept", namespaces=duplicates)
        return dep_set

    def detect(self, resolved: list[ResolvedDependency], *, check_changes: bool) -> ChangeReport:
        current = self.canonicalize(resolved)
        previous = self._store.read() if check_changes and self._store is not None else None
        report = ChangeReport(
            current=current,
            previous=previous,
            checked=check_changes,
            duplicates=current.duplicate_namespaces(),
        )
        self._log.debug(
            "change check",
            checked=check_changes,
            has_snapshot=previous is not None,
            changed=report.changed,
        )
        return report
