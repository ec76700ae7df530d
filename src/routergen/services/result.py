"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: Pipeline-facing service methods return ServiceResult; stage
classes raise RouterGenError and never build results themselves.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from routergen.domain.errors import RouterGenError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: RouterGenError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=exc.detail)


class ServiceResult(BaseModel):
    """Return type of every service operation.

    Attributes:
        ok: Whether the operation succeeded. A build command that exits
            non-zero still yields ``ok=True``; see ``data["status"]``.
        op: Name of the operation (``"build"``, ``"render"``, ``"status"``).
        data: Operation-specific payload.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timings).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: RouterGenError, *, warnings: list[str] | None = None) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError.from_exception(exc),
            warnings=warnings or [],
        )
