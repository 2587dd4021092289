"""Tree node model for ``yarn list --json`` output."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Iterable, Mapping
from typing import Any


@dataclass(frozen=True)
class TreeNode:
    """One entry of a yarn dependency tree.

    ``name`` is the composite ``<package>@<version>`` string. A shadow node is
    a back-reference to a package fully defined elsewhere in the tree and
    carries no children of its own.
    """

    name: str
    children: tuple[TreeNode, ...] = ()
    shadow: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise ValueError("Tree node name must be a string")

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"name": self.name}
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        if self.shadow:
            data["shadow"] = True
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TreeNode:
        # hint, color and depth are display metadata and are dropped here
        children = data.get("children") or []
        return cls(
            name=str(data["name"]),
            children=tuple(cls.from_dict(child) for child in children),
            shadow=bool(data.get("shadow", False)),
        )

    @classmethod
    def from_iterable(cls, trees: Iterable[Mapping[str, Any]]) -> tuple[TreeNode, ...]:
        return tuple(cls.from_dict(tree) for tree in trees)
