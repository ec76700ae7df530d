"""Shared pytest fixtures for routergen tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from helpers import fake_build_command, write_config

from routergen.config.models import BuildConfig
from routergen.config.settings import RouterGenSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of settings resolution."""
    for var in ("ROUTERGEN_CONFIG", "ROUTERGEN_VERBOSE", "ROUTERGEN_QUIET", "ROUTERGEN_JSON_OUTPUT"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def build_log(tmp_path: Path) -> Path:
    """File the fake build command appends to on every run."""
    return tmp_path / "build-invocations.log"


@pytest.fixture
def settings_factory(tmp_path: Path, build_log: Path) -> Callable[..., RouterGenSettings]:
    """Build settings rooted at tmp_path with a fake build command."""

    def factory(exit_code: int = 0, **overrides: Any) -> RouterGenSettings:
        overrides.setdefault("build", BuildConfig(command=fake_build_command(build_log, exit_code)))
        return RouterGenSettings.from_cli(project_root=tmp_path, **overrides)

    return factory


@pytest.fixture
def make_crate(tmp_path: Path) -> Callable[..., Path]:
    """Create a handler crate directory with a minimal Cargo.toml."""

    def factory(name: str, version: str = "0.1.0", *, dirname: str | None = None) -> Path:
        crate = tmp_path / "crates" / (dirname or name)
        crate.mkdir(parents=True, exist_ok=True)
        (crate / "Cargo.toml").write_text(
            f'[package]\nname = "{name}"\nversion = "{version}"\nedition = "2024"\n',
            encoding="utf-8",
        )
        return crate

    return factory


@pytest.fixture
def two_crates(make_crate: Callable[..., Path]) -> tuple[Path, Path]:
    """Crates ``a`` (package crate-a) and ``b`` (package crate-b)."""
    return make_crate("crate-a", dirname="a"), make_crate("crate-b", dirname="b")


@pytest.fixture
def project(tmp_path: Path, build_log: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """CWD set to tmp_path with a routergen.toml pointing at the fake build."""
    write_config(tmp_path, fake_build_command(build_log))
    monkeypatch.chdir(tmp_path)
    return tmp_path
