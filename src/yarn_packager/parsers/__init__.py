"""Parsers for yarn list output, lockfiles and npm version ranges."""
