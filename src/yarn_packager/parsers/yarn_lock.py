"""Rebase relative ``file:`` references inside yarn.lock text."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from ..models import LockfileReplacement

logger = logging.getLogger(__name__)

# Matches "pkg@file:../dep" and "pkg@./dep" up to the closing quote, colon or comma.
FILE_VERSION_PATTERN = re.compile(r"""[^"/]@(?:file:)?((?:\./|\.\./).*?)[":,]""", re.MULTILINE)


def find_file_references(path_to_package_root: str, lockfile: str) -> list[LockfileReplacement]:
    """Return one replacement per relative reference, in discovery order."""
    replacements: list[LockfileReplacement] = []
    for match in FILE_VERSION_PATTERN.finditer(lockfile):
        old_ref = match.group(1)
        new_ref = f"{path_to_package_root}/{old_ref}".replace("\\", "/")
        replacements.append(LockfileReplacement(old_ref=old_ref, new_ref=new_ref))
    return replacements


def overlapping_replacements(
    replacements: Sequence[LockfileReplacement],
) -> list[tuple[LockfileReplacement, LockfileReplacement]]:
    """Return (earlier, later) pairs where ``later.old_ref`` occurs in ``earlier.new_ref``.

    Replacements are applied one after another on the whole text, so such a
    later replacement may rewrite the text an earlier one just produced.
    """
    pairs = []
    for index, earlier in enumerate(replacements):
        for later in replacements[index + 1 :]:
            if later.old_ref in earlier.new_ref:
                pairs.append((earlier, later))
    return pairs


def apply_replacements(lockfile: str, replacements: Iterable[LockfileReplacement]) -> str:
    for replacement in replacements:
        lockfile = replacement.apply(lockfile)
    return lockfile


def rebase_lockfile(path_to_package_root: str, lockfile: str) -> str:
    """Prefix every relative file reference in ``lockfile`` with ``path_to_package_root``.

    Backslashes in the rebased references are normalized to forward slashes.
    """
    replacements = find_file_references(path_to_package_root, lockfile)
    if replacements:
        logger.debug("Rebasing %d lockfile reference(s) onto %s", len(replacements), path_to_package_root)
    return apply_replacements(lockfile, replacements)
