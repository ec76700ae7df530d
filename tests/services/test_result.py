"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from routergen.domain.errors import ResolutionError
from routergen.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="build", data={"status": "built"})
        assert result.ok is True
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_from_exception(self) -> None:
        exc = ResolutionError("Cannot read crates/a/Cargo.toml", detail={"dependency": "crates/a"})
        result = ServiceResult.failure("build", exc, warnings=["earlier"])
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "RESOLUTION_ERROR"
        assert result.error.detail == {"dependency": "crates/a"}
        assert result.warnings == ["earlier"]

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="build", data={"status": "skipped"}, meta={"duration_ms": 3})
        parsed = json.loads(result.model_dump_json())
        assert parsed["data"]["status"] == "skipped"
        assert parsed["meta"]["duration_ms"] == 3

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="build")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_default_detail(self) -> None:
        assert ServiceError(code="E", message="bad").detail == {}
