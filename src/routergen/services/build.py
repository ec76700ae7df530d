"""BuildInvoker — write the generated crate and run the external build.

Artifacts are staged to uniquely named ``.*.tmp`` siblings and moved into
place only once every file has been written, so a failed write leaves the
previous crate untouched. The build command runs synchronously with no
timeout; a hung build hangs the invocation.
"""

from __future__ import annotations

import os
import subprocess
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from routergen.domain.errors import BuildError, FileAccessError
from routergen.services.base import BaseStage

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from routergen.services.codegen import GeneratedArtifacts

_STAGING_SUFFIX = ".tmp"


@dataclass(frozen=True)
class BuildOutcome:
    """Structured result of one build command execution."""

    command: list[str]
    returncode: int
    stdout: str
    stderr: str
    duration_ms: float

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    def stderr_tail(self, lines: int = 20) -> str:
        return "\n".join(self.stderr.splitlines()[-lines:])


class BuildInvoker(BaseStage):
    """Owns the target directory for the duration of one invocation."""

    stage_name = "build"

    def __init__(
        self,
        target_dir: Path,
        command: list[str],
        log: BoundLogger | None = None,
    ) -> None:
        super().__init__(log)
        self.target_dir = target_dir
        self.command = list(command)

    def write_artifacts(self, artifacts: GeneratedArtifacts) -> list[Path]:
        """Write the crate files, creating directories as needed.

        Returns the paths written. Unrelated files in the target
        directory are never touched; staging files get unique names.
        """
        staged: list[tuple[Path, Path]] = []
        try:
            for relative, content in artifacts.files():
                final = self.target_dir / relative
                final.parent.mkdir(parents=True, exist_ok=True)
                with tempfile.NamedTemporaryFile(
                    "w",
                    encoding="utf-8",
                    dir=final.parent,
                    prefix=f".{final.name}.",
                    suffix=_STAGING_SUFFIX,
                    delete=False,
                ) as fh:
                    staged.append((Path(fh.name), final))
                    fh.write(content)
            for tmp, final in staged:
                os.replace(tmp, final)
        except OSError as exc:
            for tmp, _ in staged:
                tmp.unlink(missing_ok=True)
            msg = f"Cannot write generated crate in {self.target_dir}: {exc.strerror or exc}"
            raise FileAccessError(msg, detail={"target": str(self.target_dir)}) from exc

        written = [final for _, final in staged]
        self._log.info("artifacts written", files=[str(p) for p in written])
        return written

    def run(self) -> BuildOutcome:
        """Run the build command in the target directory and wait for it.

        Raises:
            BuildError: the command could not be launched at all.
        """
        if not self.command:
            raise BuildError("Build command is empty", detail={"command": []})

        self._log.info("build started", command=self.command)
        started = time.perf_counter()
        try:
            proc = subprocess.run(
                self.command,
                cwd=self.target_dir,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as exc:
            msg = f"Cannot launch build command {self.command[0]!r}: {exc.strerror or exc}"
            raise BuildError(msg, detail={"command": self.command}) from exc

        outcome = BuildOutcome(
            command=self.command,
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        if outcome.succeeded:
            self._log.info("build succeeded", duration_ms=outcome.duration_ms)
        else:
            self._log.warning(
                "build failed",
                returncode=outcome.returncode,
                duration_ms=outcome.duration_ms,
                stderr_tail=outcome.stderr_tail(5),
            )
        return outcome
