"""Lockfile reference replacement model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LockfileReplacement:
    """A relative ``file:`` reference and the rebased text replacing it."""

    old_ref: str
    new_ref: str

    def __post_init__(self) -> None:
        if not self.old_ref:
            raise ValueError("old_ref must be non-empty")

    def apply(self, text: str) -> str:
        return text.replace(self.old_ref, self.new_ref, 1)

    def to_dict(self) -> dict[str, str]:
        return {"oldRef": self.old_ref, "newRef": self.new_ref}
