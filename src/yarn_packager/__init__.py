"""yarn-packager core package.

Turns ``yarn list`` dependency trees into nested dependency maps and rebases
relative lockfile references, for use by bundlers that relocate a package
before installing it.
"""

from . import config, packagers, process

__all__ = [
    "config",
    "packagers",
    "process",
]
