"""Convert ``yarn list --json --production`` trees into dependency maps.

Yarn prints every package once with its full subtree. Later occurrences are
emitted as *shadow* nodes: bare ``name@range`` back-references without
children. Conversion therefore runs in two phases. The top-level trees are
indexed first (they are what lives in the root ``node_modules``), then the
trees are walked and each shadow node is either pinned to that root install
or dropped because a sibling carries the real definition.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from jsonschema import Draft202012Validator

from ..models import DependencyEntry, DependencyMap, TreeNode
from .semver import satisfies

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).resolve().parents[1] / "schemas" / "yarn-list.schema.json"


class TreeError(RuntimeError):
    """Base error for yarn trees that cannot be converted."""


class ListOutputError(TreeError):
    """Raised when ``yarn list`` output is not valid JSON or not a tree."""


class ShadowResolutionError(TreeError):
    """Raised when a shadow node references a package missing from the root."""

    def __init__(self, name: str, reference: str) -> None:
        super().__init__(
            f"Shadow reference '{reference}' points to '{name}', "
            "which is not installed at the root level"
        )
        self.name = name
        self.reference = reference


def split_name_version(name: str) -> tuple[str, str]:
    """Split ``<package>@<version>`` on the last ``@``.

    Scoped names keep their leading ``@``. Without any ``@`` the whole string
    is the name and the version is empty.
    """
    at_index = name.rfind("@")
    if at_index == -1:
        return name, ""
    return name[:at_index], name[at_index + 1 :]


def index_root_dependencies(trees: Iterable[TreeNode]) -> dict[str, str]:
    """Map each top-level package to its version; the first occurrence wins."""
    root: dict[str, str] = {}
    for tree in trees:
        name, version = split_name_version(tree.name)
        root.setdefault(name, version)
    return root


def _resolve_shadow(
    name: str, version: str, tree: TreeNode, root_dependencies: Mapping[str, str]
) -> DependencyEntry | None:
    if name not in root_dependencies:
        raise ShadowResolutionError(name, tree.name)

    root_version = root_dependencies[name]
    if satisfies(root_version, version):
        logger.debug("%s resolved by root install %s", tree.name, root_version)
        return DependencyEntry(version=version, is_root_dep=True)

    # the real definition is a sibling further along this level
    logger.debug("%s not satisfied by root %s, skipping", tree.name, root_version)
    return None


def convert_trees(
    trees: Sequence[TreeNode], root_dependencies: Mapping[str, str]
) -> DependencyMap:
    """Convert one level of the tree, recursing into non-shadow children.

    Raises:
        ShadowResolutionError: a shadow node names a package absent from
            ``root_dependencies``.
    """
    deps: DependencyMap = {}

    for tree in trees:
        name, version = split_name_version(tree.name)
        if name in deps:
            continue

        if tree.shadow:
            entry = _resolve_shadow(name, version, tree, root_dependencies)
            if entry is not None:
                deps[name] = entry
            continue

        dependencies = convert_trees(tree.children, root_dependencies) if tree.children else None
        deps[name] = DependencyEntry(version=version, dependencies=dependencies)

    return deps


def convert_root_trees(trees: Sequence[TreeNode]) -> DependencyMap:
    """Index the root level, then convert the whole tree against it."""
    root_dependencies = index_root_dependencies(trees)
    return convert_trees(trees, root_dependencies)


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_list_output(document: Any) -> None:
    schema = json.loads(_SCHEMA_PATH.read_text(encoding="utf-8"))
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise ListOutputError("yarn list output is not a dependency tree:\n" + _format_errors(errors))


def parse_list_output(text: str) -> tuple[TreeNode, ...]:
    """Decode and validate ``yarn list --json`` output into root tree nodes."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ListOutputError(f"Failed to read yarn list JSON: {exc}") from exc

    validate_list_output(document)
    return TreeNode.from_iterable(document["data"]["trees"])


def convert_list_output(text: str) -> DependencyMap:
    return convert_root_trees(parse_list_output(text))
