"""Dependency map models produced from a yarn tree."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Mapping
from typing import TypeAlias


@dataclass(frozen=True)
class DependencyEntry:
    """Resolved version of a package plus its nested dependencies, if any."""

    version: str
    dependencies: dict[str, DependencyEntry] | None = None
    is_root_dep: bool = False

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"version": self.version}
        if self.dependencies is not None:
            data["dependencies"] = dependency_map_to_dict(self.dependencies)
        if self.is_root_dep:
            data["isRootDep"] = True
        return data


DependencyMap: TypeAlias = dict[str, DependencyEntry]


def dependency_map_to_dict(deps: Mapping[str, DependencyEntry]) -> dict[str, object]:
    """Render a dependency map as plain JSON-compatible dicts."""
    return {name: entry.to_dict() for name, entry in deps.items()}


@dataclass(frozen=True)
class DependenciesResult:
    """Outcome of a dependency listing.

    Exactly one of ``dependencies`` (the converted tree) or ``stdout`` (raw
    output kept when the listing exited non-zero but is still usable) is set.
    """

    dependencies: DependencyMap | None = None
    stdout: str | None = None

    def __post_init__(self) -> None:
        if (self.dependencies is None) == (self.stdout is None):
            raise ValueError("Exactly one of dependencies or stdout must be provided")

    def to_dict(self) -> dict[str, object]:
        if self.dependencies is not None:
            return {"dependencies": dependency_map_to_dict(self.dependencies)}
        return {"stdout": self.stdout}
