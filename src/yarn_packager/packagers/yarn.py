"""Yarn packager.

Yarn specific settings (default):
  command (yarn, yarn.cmd on Windows) - executable to invoke
  useLockfile (true) - install with --frozen-lockfile
  ignoredErrors ([]) - stderr prefixes tolerated by get_prod_dependencies
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from ..config import PackagerSettings
from ..models import DependenciesResult
from ..parsers.yarn_lock import rebase_lockfile
from ..parsers.yarn_tree import convert_list_output
from ..process import ProcessRunner, SpawnError, spawn_process

logger = logging.getLogger(__name__)


class Yarn:
    """Yarn (classic) integration built on an injectable process runner."""

    def __init__(
        self, settings: PackagerSettings | None = None, runner: ProcessRunner = spawn_process
    ) -> None:
        self.settings = settings or PackagerSettings()
        self._run = runner

    @property
    def command(self) -> str:
        return self.settings.command

    @property
    def lockfile_name(self) -> str:
        return "yarn.lock"

    @property
    def copy_package_section_names(self) -> list[str]:
        return ["resolutions"]

    @property
    def must_copy_modules(self) -> bool:
        return False

    def _is_recoverable(self, err: SpawnError) -> bool:
        """True when every non-empty stderr line is an ignored error and stdout has content."""
        if not err.stdout:
            return False
        for line in err.stderr.split("\n"):
            if not line:
                continue
            if not any(ignored.matches(line) for ignored in self.settings.ignored_errors):
                return False
        return True

    async def get_prod_dependencies(
        self, cwd: str | Path, depth: int | None = None
    ) -> DependenciesResult:
        """List production dependencies and convert them into a dependency map.

        When yarn exits non-zero but printed a tree and only ignored errors,
        the raw stdout is returned instead of raising.
        """
        depth = self.settings.depth if depth is None else depth
        args = ["list", *([f"--depth={depth}"] if depth else []), "--json", "--production"]

        try:
            output = await self._run(self.command, args, cwd)
        except SpawnError as err:
            if self._is_recoverable(err):
                logger.warning("%s list exited with %s; using captured output", self.command, err.returncode)
                return DependenciesResult(stdout=err.stdout)
            raise

        return DependenciesResult(dependencies=convert_list_output(output.stdout))

    def rebase_lockfile(self, path_to_package_root: str, lockfile: str) -> str:
        return rebase_lockfile(path_to_package_root, lockfile)

    async def install(
        self, cwd: str | Path, extra_args: Sequence[str] = (), use_lockfile: bool = True
    ) -> None:
        if use_lockfile:
            args = ["install", "--frozen-lockfile", "--non-interactive", *extra_args]
        else:
            args = ["install", "--non-interactive", *extra_args]

        await self._run(self.command, args, cwd)

    async def prune(self, cwd: str | Path) -> None:
        # yarn install prunes automatically
        await self.install(cwd, [])

    async def run_scripts(self, cwd: str | Path, script_names: Sequence[str]) -> None:
        """Run every script concurrently; the first failure cancels the rest."""
        tasks = [
            asyncio.ensure_future(self._run(self.command, ["run", name], cwd))
            for name in script_names
        ]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
