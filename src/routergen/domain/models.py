"""Dependency models shared by every pipeline stage.

Field names on the wire follow the ``deps.json`` / ``last-deps.json``
formats: a spec is ``{path, handler, ns}`` and a resolved dependency is
``{user, auto}``. Python attribute names are the descriptive ones.

INVARIANT: canonical order is a pure function of namespace strings.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable, Iterator

from pydantic import BaseModel, Field, RootModel, field_validator

# A Rust path such as ``Handler`` or ``handlers::buffer::BufferHandler``.
HANDLER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(::[A-Za-z_][A-Za-z0-9_]*)*$")

ALIAS_PREFIX = "dep"


class DependencySpec(BaseModel):
    """User intent: where a handler crate lives and which namespace it serves."""

    model_config = {"frozen": True, "extra": "forbid", "populate_by_name": True}

    path: str
    handler: str
    namespace: str = Field(alias="ns")

    @field_validator("handler")
    @classmethod
    def _handler_is_rust_path(cls, value: str) -> str:
        if not HANDLER_PATTERN.match(value):
            msg = f"handler must be a Rust path like 'Handler' or 'module::Handler', got {value!r}"
            raise ValueError(msg)
        return value


class PackageDescriptor(BaseModel):
    """``[package]`` identity read from a dependency's own Cargo.toml."""

    model_config = {"frozen": True}

    name: str
    version: str


class ResolvedDependency(BaseModel):
    """A spec paired with the package descriptor resolved for it."""

    model_config = {"frozen": True, "populate_by_name": True}

    spec: DependencySpec = Field(alias="user")
    descriptor: PackageDescriptor = Field(alias="auto")


class DependencySet(RootModel[tuple[ResolvedDependency, ...]]):
    """Ordered dependencies, normally built via :meth:`canonical`.

    Equality is structural over every field, in order.
    """

    model_config = {"frozen": True}

    @classmethod
    def canonical(cls, items: Iterable[ResolvedDependency]) -> DependencySet:
        """Stable-sort *items* ascending on namespace."""
        return cls(tuple(sorted(items, key=lambda dep: dep.spec.namespace)))

    def __iter__(self) -> Iterator[ResolvedDependency]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def iter_aliased(self) -> Iterator[tuple[str, ResolvedDependency]]:
        """Yield ``(alias, dependency)`` where alias is ``dep{position}``."""
        for index, dep in enumerate(self.root):
            yield f"{ALIAS_PREFIX}{index}", dep

    def namespaces(self) -> list[str]:
        return [dep.spec.namespace for dep in self.root]

    def duplicate_namespaces(self) -> list[str]:
        """Namespaces claimed by more than one dependency, sorted."""
        counts = Counter(self.namespaces())
        return sorted(ns for ns, count in counts.items() if count > 1)

    def to_json(self) -> str:
        """Compact, deterministic snapshot serialization."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, text: str) -> DependencySet:
        return cls.model_validate_json(text)
