"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, routergen.toml only contains
overrides. With no config file at all, the generated crate matches the
stock ``nvim-router`` binary layout.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ProgramConfig(BaseModel):
    """[program] section — identity of the generated crate."""

    model_config = {"frozen": True}

    name: str = "nvim-router"
    version: str = "0.1.0"
    edition: str = "2024"


class RouterConfig(BaseModel):
    """[router] section — fixed framework dependencies of the generated crate."""

    model_config = {"frozen": True}

    git: str = "https://github.com/naughie/nvim-router.rs.git"
    branch: str = "main"
    features: list[str] = Field(default_factory=lambda: ["tokio"])
    tokio_version: str = "1"
    tokio_features: list[str] = Field(
        default_factory=lambda: ["macros", "rt-multi-thread", "sync"]
    )


class BuildConfig(BaseModel):
    """[build] section."""

    model_config = {"frozen": True}

    command: list[str] = Field(default_factory=lambda: ["cargo", "build", "--release"])
    snapshot_file: str = "last-deps.json"
    deps_file: str = "deps.json"


class GenerateConfig(BaseModel):
    """[generate] section."""

    model_config = {"frozen": True}

    allow_duplicate_namespaces: bool = False
