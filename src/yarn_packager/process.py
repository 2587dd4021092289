"""Asynchronous process runner used by the packagers."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import subprocess
from dataclasses import dataclass
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class SpawnError(RuntimeError):
    """Raised when a command cannot be started or exits with a failure status.

    The captured ``stdout`` and ``stderr`` are kept so callers can decide
    whether the output is still usable.
    """

    def __init__(
        self,
        command: str,
        args: Sequence[str],
        returncode: int | None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        detail = f"exit code {returncode}" if returncode is not None else "could not be started"
        super().__init__(f"{command} {' '.join(args)} failed: {detail}")
        self.command = command
        self.args_list = list(args)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


@dataclass(frozen=True)
class ProcessOutput:
    stdout: str
    stderr: str


class ProcessRunner(Protocol):
    """Awaitable callable that runs ``command`` with ``args`` inside ``cwd``."""

    async def __call__(
        self, command: str, args: Sequence[str], cwd: str | Path
    ) -> ProcessOutput: ...


async def spawn_process(command: str, args: Sequence[str], cwd: str | Path) -> ProcessOutput:
    """Run a command to completion and capture its output.

    Raises:
        SpawnError: the executable is missing or the process exits non-zero.
    """
    logger.debug("Running: %s %s (cwd=%s)", command, " ".join(args), cwd)

    try:
        process = await asyncio.create_subprocess_exec(
            command,
            *args,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=str(cwd),
        )
    except OSError as exc:
        raise SpawnError(command, args, None, stderr=str(exc)) from exc

    try:
        raw_stdout, raw_stderr = await process.communicate()
    except asyncio.CancelledError:
        if process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
        raise

    stdout = raw_stdout.decode("utf-8", errors="replace")
    stderr = raw_stderr.decode("utf-8", errors="replace")

    if process.returncode != 0:
        raise SpawnError(command, args, process.returncode, stdout=stdout, stderr=stderr)

    return ProcessOutput(stdout=stdout, stderr=stderr)
