"""Configuration loader for the yarn packager.

Reads packager options from a JSON or YAML file and validates the structure.
Every key is optional:

- ``command``: executable to invoke (default ``yarn``, ``yarn.cmd`` on Windows)
- ``useLockfile``: install with ``--frozen-lockfile`` (default true)
- ``ignoredErrors``: stderr prefixes tolerated when ``yarn list`` fails
- ``scripts``: script names run by ``yarn-packager run`` when none are given
- ``depth``: default ``--depth`` for dependency listing
"""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_NAME = "yarn-packager.json"
CONFIG_PATH_ENV_VAR = "YARN_PACKAGER_CONFIG"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


def default_command(platform: str | None = None) -> str:
    platform = sys.platform if platform is None else platform
    return "yarn.cmd" if platform.startswith("win") else "yarn"


@dataclass(slots=True, frozen=True)
class IgnoredError:
    """A stderr line prefix that does not make a dependency listing fail."""

    npm_error: str

    def matches(self, line: str) -> bool:
        return line.startswith(f"npm ERR! {self.npm_error}")


@dataclass(slots=True, frozen=True)
class PackagerSettings:
    """Options shared by every packager operation."""

    command: str = field(default_factory=default_command)
    use_lockfile: bool = True
    ignored_errors: tuple[IgnoredError, ...] = ()
    scripts: tuple[str, ...] = ()
    depth: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PackagerSettings:
        """Create settings from a dictionary, validating each field."""
        command = data.get("command", default_command())
        if not isinstance(command, str) or not command:
            raise ConfigError("'command' must be a non-empty string")

        use_lockfile = data.get("useLockfile", True)
        if not isinstance(use_lockfile, bool):
            raise ConfigError("'useLockfile' must be a boolean")

        ignored = data.get("ignoredErrors", [])
        if not isinstance(ignored, list) or any(
            not isinstance(item, str) or not item for item in ignored
        ):
            raise ConfigError("'ignoredErrors' must be an array of non-empty strings")

        scripts = data.get("scripts", [])
        if not isinstance(scripts, list) or any(
            not isinstance(item, str) or not item for item in scripts
        ):
            raise ConfigError("'scripts' must be an array of non-empty strings")

        depth = data.get("depth")
        if depth is not None and (isinstance(depth, bool) or not isinstance(depth, int) or depth < 0):
            raise ConfigError("'depth' must be a non-negative integer")

        return cls(
            command=command,
            use_lockfile=use_lockfile,
            ignored_errors=tuple(IgnoredError(item) for item in ignored),
            scripts=tuple(scripts),
            depth=depth,
        )


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. YARN_PACKAGER_CONFIG environment variable
    3. yarn-packager.json in the working directory, when present
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    default = Path.cwd() / DEFAULT_CONFIG_NAME
    return default if default.exists() else None


def _decode(config_path: Path, content: str) -> Any:
    if config_path.suffix in {".yml", ".yaml"}:
        import yaml

        try:
            return yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in configuration file: {exc}") from exc

    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc


def load_settings(path: Path | str | None = None) -> PackagerSettings:
    """Load and validate packager settings.

    Args:
        path: Optional path to the config file. If not provided, uses the
            YARN_PACKAGER_CONFIG env var or yarn-packager.json, and falls back
            to defaults when neither exists.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return PackagerSettings()

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    data = _decode(config_path, content)
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be an object")

    return PackagerSettings.from_dict(data)
