"""
Parser for package-lock.json and npm-shrinkwrap.json.

Two layouts are read, and a lockfile may carry both:

- ``packages`` (lockfileVersion 2/3): flat map keyed by install path,
  e.g. ``node_modules/a/node_modules/@scope/b``. The ``""`` key is the
  project itself and is skipped.
- ``dependencies`` (lockfileVersion 1): nested tree of
  ``name -> {version, dependencies}``.
"""

from __future__ import annotations

import json
from typing import Any, Iterator

from lockguard.core.models import ResolutionPair
from lockguard.parsers.base import BaseParser, ParseResult

NODE_MODULES = "node_modules/"


def package_name_from_path(key: str) -> str:
    """``node_modules/a/node_modules/@scope/b`` -> ``@scope/b``."""
    return key.rsplit(NODE_MODULES, 1)[-1].strip("/")


class NpmLockParser(BaseParser):
    name = "npm"
    filenames = ("package-lock.json", "npm-shrinkwrap.json")

    def parse(self, content: bytes) -> ParseResult:
        try:
            data = json.loads(self._decode(content))
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
            return ParseResult.failure(f"invalid JSON: {exc}")

        if not isinstance(data, dict):
            return ParseResult.failure("top-level JSON value is not an object")

        pairs: list[ResolutionPair] = []
        pairs.extend(self._from_packages(data.get("packages")))
        pairs.extend(self._from_dependencies(data.get("dependencies")))
        return ParseResult.success(pairs)

    def _from_packages(self, packages: Any) -> list[ResolutionPair]:
        pairs: list[ResolutionPair] = []
        if not isinstance(packages, dict):
            return pairs

        for key, info in packages.items():
            # "" is the root project; paths without node_modules/ are workspace members
            if not key or NODE_MODULES not in key:
                continue
            if not isinstance(info, dict) or info.get("link"):
                continue

            name = package_name_from_path(key)
            version = info.get("version")
            if name and isinstance(version, str) and version:
                pairs.append(self._pair(name, version))
        return pairs

    def _from_dependencies(self, dependencies: Any) -> list[ResolutionPair]:
        pairs: list[ResolutionPair] = []
        if not isinstance(dependencies, dict):
            return pairs

        # depth-first, one pair per node
        stack: list[Iterator[tuple[str, Any]]] = [iter(dependencies.items())]
        while stack:
            try:
                name, info = next(stack[-1])
            except StopIteration:
                stack.pop()
                continue

            if not name or not isinstance(info, dict):
                continue
            version = info.get("version")
            if isinstance(version, str) and version:
                pairs.append(self._pair(name, version))

            nested = info.get("dependencies")
            if isinstance(nested, dict):
                stack.append(iter(nested.items()))

        return pairs
