"""Error taxonomy for the generation pipeline.

Every stage raises a :class:`RouterGenError` subclass. The pipeline service
converts them into a failed ``ServiceResult`` whose ``error.code`` is the
subclass's ``code``. Snapshot read failures never surface here; they are
treated as "no previous build".
"""

from __future__ import annotations

from typing import Any


class RouterGenError(Exception):
    """Base class for fatal pipeline errors."""

    code = "ROUTERGEN_ERROR"

    def __init__(self, message: str, *, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail or {}


class FormatError(RouterGenError):
    """Dependency specification content could not be parsed or validated."""

    code = "FORMAT_ERROR"


class DuplicateNamespaceError(FormatError):
    """Two dependencies claim the same namespace."""

    code = "DUPLICATE_NAMESPACE"


class FileAccessError(RouterGenError):
    """A file or directory could not be read or written."""

    code = "IO_ERROR"


class ResolutionError(RouterGenError):
    """A dependency's own ``Cargo.toml`` is missing or lacks name/version."""

    code = "RESOLUTION_ERROR"


class BuildError(RouterGenError):
    """The external build command could not be launched."""

    code = "BUILD_ERROR"
