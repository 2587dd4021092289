"""Package-manager integrations."""

from .base import Packager
from .yarn import Yarn

__all__ = [
    "Packager",
    "Yarn",
]
