"""Structural interface shared by package-manager integrations."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..models import DependenciesResult


@runtime_checkable
class Packager(Protocol):
    """Operations a bundler needs from a package manager."""

    @property
    def lockfile_name(self) -> str: ...

    @property
    def copy_package_section_names(self) -> list[str]: ...

    @property
    def must_copy_modules(self) -> bool: ...

    async def get_prod_dependencies(
        self, cwd: str | Path, depth: int | None = None
    ) -> DependenciesResult: ...

    def rebase_lockfile(self, path_to_package_root: str, lockfile: str) -> str: ...

    async def install(
        self, cwd: str | Path, extra_args: Sequence[str] = (), use_lockfile: bool = True
    ) -> None: ...

    async def prune(self, cwd: str | Path) -> None: ...

    async def run_scripts(self, cwd: str | Path, script_names: Sequence[str]) -> None: ...
