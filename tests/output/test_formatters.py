"""Tests for JSON, quiet, and Rich result formatting."""

from __future__ import annotations

import json

from routergen.domain.errors import ResolutionError
from routergen.output.console import style_for_status
from routergen.output.formatters import OutputSettings, format_result
from routergen.services.result import ServiceResult

_ROW = {
    "alias": "dep0",
    "ns": "buffers",
    "package": "buffer-handler",
    "version": "0.2.0",
    "path": "../buffers",
    "handler": "Handler",
}


def _built() -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="build",
        data={
            "status": "built",
            "target": "router",
            "dependencies": [_ROW],
            "files": ["router/Cargo.toml", "router/src/main.rs"],
            "returncode": 0,
        },
        meta={"duration_ms": 12.5},
    )


def _failed() -> ServiceResult:
    exc = ResolutionError("Cannot read ../gone/Cargo.toml", detail={"dependency": "../gone"})
    return ServiceResult.failure("build", exc)


class TestJsonOutput:
    def test_full_payload(self) -> None:
        out = format_result(_built(), settings=OutputSettings(json_output=True))
        data = json.loads(out)
        assert data["ok"] is True
        assert data["data"]["dependencies"][0]["ns"] == "buffers"
        assert data["meta"]["duration_ms"] == 12.5

    def test_json_wins_over_quiet(self) -> None:
        out = format_result(_built(), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(out)["op"] == "build"

    def test_error_payload(self) -> None:
        data = json.loads(format_result(_failed(), settings=OutputSettings(json_output=True)))
        assert data["ok"] is False
        assert data["error"]["code"] == "RESOLUTION_ERROR"
        assert data["error"]["detail"] == {"dependency": "../gone"}


class TestQuietOutput:
    def test_status_only(self) -> None:
        assert format_result(_built(), settings=OutputSettings(quiet=True)) == "built"

    def test_without_status(self) -> None:
        result = ServiceResult(ok=True, op="render", data={"manifest": ""})
        assert format_result(result, settings=OutputSettings(quiet=True)) == "OK: render"

    def test_error(self) -> None:
        out = format_result(_failed(), settings=OutputSettings(quiet=True))
        assert out == "ERROR: build: Cannot read ../gone/Cargo.toml"


class TestRichOutput:
    def test_build(self) -> None:
        out = format_result(_built())
        assert out.startswith("OK")
        assert "built" in out
        assert "dep0" in out
        assert "buffers" in out
        assert "router/src/main.rs" not in out

    def test_build_verbose(self) -> None:
        out = format_result(_built(), settings=OutputSettings(verbose=True))
        assert "router/src/main.rs" in out
        assert "duration_ms" in out

    def test_build_failed_shows_stderr_tail(self) -> None:
        result = ServiceResult(
            ok=True,
            op="build",
            data={
                "status": "build_failed",
                "target": "router",
                "dependencies": [],
                "returncode": 101,
                "stderr_tail": "error[E0432]: unresolved import `dep0::Handler`",
            },
        )
        out = format_result(result)
        assert "build_failed" in out
        assert "101" in out
        assert "error[E0432]: unresolved import `dep0::Handler`" in out

    def test_render_is_verbatim(self) -> None:
        manifest = '[package]\nname = "nvim-router"\n' + "x" * 200 + "\n"
        result = ServiceResult(
            ok=True,
            op="render",
            data={"dependencies": [], "manifest": manifest, "entry_point": "fn main() {}\n"},
        )
        out = format_result(result)
        assert manifest in out
        assert out.endswith("fn main() {}")

    def test_status(self) -> None:
        result = ServiceResult(
            ok=True,
            op="status",
            data={
                "target": "router",
                "snapshot": "router/last-deps.json",
                "has_snapshot": True,
                "changed": False,
                "current": [_ROW],
                "previous": [_ROW],
            },
        )
        out = format_result(result)
        assert "up to date" in out
        assert "last successful build" not in out
        assert "last successful build" in format_result(result, settings=OutputSettings(verbose=True))

    def test_error_detail_only_when_verbose(self) -> None:
        plain = format_result(_failed())
        assert plain.startswith("ERROR")
        assert "Cannot read ../gone/Cargo.toml" in plain
        assert "dependency" not in plain
        assert "dependency: ../gone" in format_result(_failed(), settings=OutputSettings(verbose=True))

    def test_generic_op(self) -> None:
        result = ServiceResult(ok=True, op="other", data={"answer": 42})
        out = format_result(result)
        assert "other" in out
        assert "answer: 42" in out


def test_style_for_status() -> None:
    assert style_for_status("built") == "rg.status.built"
    assert style_for_status("unknown") == ""
