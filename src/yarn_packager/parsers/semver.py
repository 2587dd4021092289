"""npm semver range handling built atop semantic_version.

Ranges follow npm rules through ``NpmSpec``: exact versions, caret and tilde
ranges, X-ranges, hyphen ranges, comparator sets and ``||`` unions. A
prerelease only satisfies a range that names a prerelease of the same
``major.minor.patch``.

npm also accepts a space between an operator and its version (``>= 1.0.0``);
that gap is closed before parsing.
"""

from __future__ import annotations

import re

from semantic_version import NpmSpec, Version

_OPERATOR_GAP = re.compile(r"(<=|>=|<|>|=|\^|~)\s+")


def _parse_version(v: str) -> Version:
    # build metadata never takes part in npm comparisons
    return Version(v.strip().lstrip("=v").split("+", 1)[0])


def _parse_range(expr: str) -> NpmSpec:
    groups = (" ".join(_OPERATOR_GAP.sub(r"\1", group).split()) for group in expr.split("||"))
    return NpmSpec(" || ".join(groups))


def satisfies(installed: str, expr: str) -> bool:
    """Return True when ``installed`` falls inside the npm range ``expr``.

    Unparseable versions or ranges never satisfy.
    """
    try:
        return _parse_range(expr).match(_parse_version(installed))
    except ValueError:
        return False
