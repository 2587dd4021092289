"""Data models for yarn dependency trees and lockfile rebasing."""

from __future__ import annotations

from .dependency import (
    DependenciesResult,
    DependencyEntry,
    DependencyMap,
    dependency_map_to_dict,
)
from .lockfile_replacement import LockfileReplacement
from .tree_node import TreeNode

__all__ = [
    "DependenciesResult",
    "DependencyEntry",
    "DependencyMap",
    "LockfileReplacement",
    "TreeNode",
    "dependency_map_to_dict",
]
