"""Command line entry point for the yarn packager.

Usage:
  yarn-packager deps [--cwd DIR] [--depth N]
  yarn-packager rebase-lockfile --root PREFIX LOCKFILE [--output PATH]
  yarn-packager install [--cwd DIR] [--no-lockfile] [--arg=ARG ...]
  yarn-packager prune [--cwd DIR]
  yarn-packager run [--cwd DIR] [SCRIPT ...]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .config import ConfigError, load_settings
from .packagers import Yarn
from .parsers.yarn_tree import TreeError
from .process import SpawnError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="yarn-packager", description=__doc__.splitlines()[0])
    parser.add_argument("--config", type=Path, default=None, help="Path to a JSON or YAML config")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    deps = sub.add_parser("deps", help="Print production dependencies as JSON")
    deps.add_argument("--cwd", type=Path, default=Path("."))
    deps.add_argument("--depth", type=int, default=None)

    rebase = sub.add_parser("rebase-lockfile", help="Rebase relative file: references")
    rebase.add_argument("--root", required=True, help="Path prefix to the package root")
    rebase.add_argument("lockfile", type=Path)
    rebase.add_argument("--output", type=Path, default=None, help="Write here instead of stdout")

    install = sub.add_parser("install", help="Install dependencies")
    install.add_argument("--cwd", type=Path, default=Path("."))
    install.add_argument("--no-lockfile", action="store_true", help="Do not enforce yarn.lock")
    install.add_argument(
        "--arg", dest="extra", action="append", default=[], help="Extra argument passed to yarn install"
    )

    prune = sub.add_parser("prune", help="Remove extraneous packages")
    prune.add_argument("--cwd", type=Path, default=Path("."))

    run = sub.add_parser("run", help="Run package scripts concurrently")
    run.add_argument("--cwd", type=Path, default=Path("."))
    run.add_argument("scripts", nargs="*")

    return parser.parse_args(argv)


async def _dispatch(args: argparse.Namespace, yarn: Yarn) -> int:
    if args.command == "deps":
        result = await yarn.get_prod_dependencies(args.cwd, args.depth)
        print(json.dumps(result.to_dict(), indent=2))
    elif args.command == "rebase-lockfile":
        lockfile = args.lockfile.read_text(encoding="utf-8")
        rebased = yarn.rebase_lockfile(args.root, lockfile)
        if args.output is None:
            sys.stdout.write(rebased)
        else:
            args.output.write_text(rebased, encoding="utf-8")
    elif args.command == "install":
        use_lockfile = yarn.settings.use_lockfile and not args.no_lockfile
        await yarn.install(args.cwd, args.extra, use_lockfile=use_lockfile)
    elif args.command == "prune":
        await yarn.prune(args.cwd)
    elif args.command == "run":
        scripts = args.scripts or list(yarn.settings.scripts)
        if not scripts:
            print("ERROR: No scripts given or configured", file=sys.stderr)
            return 2
        await yarn.run_scripts(args.cwd, scripts)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.config)
        return asyncio.run(_dispatch(args, Yarn(settings)))
    except SpawnError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        if exc.stderr:
            print(exc.stderr.rstrip(), file=sys.stderr)
        return 1
    except (ConfigError, TreeError, OSError, UnicodeDecodeError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
