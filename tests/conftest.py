"""Shared fixtures for yarn-packager tests."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

import pytest

from yarn_packager.process import ProcessOutput, SpawnError


def list_output(trees: list[dict]) -> str:
    """Render trees the way ``yarn list --json`` prints them."""
    return json.dumps({"type": "tree", "data": {"type": "list", "trees": trees}})


class FakeRunner:
    """Process runner double that records calls and replays canned results."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str], str]] = []
        self.results: dict[tuple[str, ...], ProcessOutput | Exception] = {}
        self.default: ProcessOutput | Exception = ProcessOutput(stdout="", stderr="")

    def on(self, args: Sequence[str], result: ProcessOutput | Exception) -> None:
        self.results[tuple(args)] = result

    async def __call__(self, command: str, args: Sequence[str], cwd: str | Path) -> ProcessOutput:
        self.calls.append((command, list(args), str(cwd)))
        result = self.results.get(tuple(args), self.default)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def spawn_error():
    def _make(stdout: str = "", stderr: str = "", args: Sequence[str] = ("list",)) -> SpawnError:
        return SpawnError("yarn", args, 1, stdout=stdout, stderr=stderr)

    return _make


@pytest.fixture
def sample_trees() -> list[dict]:
    """Hoisted dep-a@1.0.0 at the root plus a nested dep-a@2.0.0 under b."""
    return [
        {"name": "samchungy-dep-a@1.0.0", "children": [], "hint": None, "color": None, "depth": 0},
        {
            "name": "samchungy-a@2.0.0",
            "children": [{"name": "samchungy-dep-a@1.0.0", "color": "dim", "shadow": True}],
            "hint": None,
            "color": "bold",
            "depth": 0,
        },
        {
            "name": "samchungy-b@2.0.0",
            "children": [
                {"name": "samchungy-dep-a@2.0.0", "color": "dim", "shadow": True},
                {"name": "samchungy-dep-a@2.0.0", "children": [], "hint": None, "color": "bold", "depth": 0},
            ],
            "hint": None,
            "color": "bold",
            "depth": 0,
        },
    ]


@pytest.fixture
def yarn_list():
    return list_output
