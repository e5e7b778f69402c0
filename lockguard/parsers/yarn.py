"""
Parser for yarn.lock (classic v1 stanza format).

    "@babel/core@^7.0.0", "@babel/core@^7.12.3":
      version "7.15.0"
      resolved "https://registry.yarnpkg.com/..."

A stanza header lists one or more ``name@range`` specifiers; the
indented body below it carries the resolved ``version``.
"""

from __future__ import annotations

import re
from typing import Optional

from lockguard.core.models import ResolutionPair
from lockguard.parsers.base import BaseParser, ParseResult

# version "1.2.3"  /  version: 1.2.3
_VERSION_RE = re.compile(r'^version:?\s+"?([^"\s]+)"?\s*$')

_LOCAL_PROTOCOLS = ("workspace:", "link:", "portal:")


def package_name_from_specifier(specifier: str) -> Optional[str]:
    """
    ``@scope/pkg@^1.0.0`` -> ``@scope/pkg``. None when there is no range.

    An npm alias (``alias@npm:target@range``) resolves to ``target``,
    the package actually installed.
    """
    specifier = specifier.strip().strip('"').strip("'")
    at = specifier.rfind("@")
    if at <= 0:
        return None
    name = specifier[:at]
    npm_at = name.find("@npm:", 1)
    if npm_at > 0:
        return name[npm_at + len("@npm:"):] or None
    # other protocols (patch:, git:) keep the name before them
    alias_at = name.find("@", 1)
    if alias_at > 0:
        name = name[:alias_at]
    return name or None


def _is_local(specifier: str) -> bool:
    """The project itself or a workspace member, never a registry package."""
    specifier = specifier.strip().strip('"').strip("'")
    at = specifier.rfind("@")
    return at > 0 and specifier[at + 1:].startswith(_LOCAL_PROTOCOLS)


class YarnLockParser(BaseParser):
    name = "yarn"
    filenames = ("yarn.lock",)

    def parse(self, content: bytes) -> ParseResult:
        try:
            text = self._decode(content)
        except UnicodeDecodeError as exc:
            return ParseResult.failure(f"not valid UTF-8: {exc}")

        pairs: list[ResolutionPair] = []
        names: list[str] = []
        body_indent: Optional[int] = None
        version: Optional[str] = None

        def flush() -> None:
            if names and version:
                pairs.extend(self._pair(name, version) for name in names)

        for raw in text.splitlines():
            stripped = raw.strip()
            if stripped.startswith("#"):
                continue

            if not stripped:
                flush()
                names, version, body_indent = [], None, None
                continue

            indent = len(raw) - len(raw.lstrip())
            if indent == 0:
                flush()
                names, version, body_indent = self._parse_header(stripped), None, None
                continue

            if not names or version is not None:
                continue
            if body_indent is None:
                body_indent = indent
            if indent != body_indent:
                # nested block such as dependencies:
                continue

            match = _VERSION_RE.match(stripped)
            if match:
                version = match.group(1)

        flush()
        return ParseResult.success(pairs)

    @staticmethod
    def _parse_header(line: str) -> list[str]:
        if not line.endswith(":"):
            return []
        specifiers = [s for s in line[:-1].split(",") if s.strip()]
        if any(_is_local(s) for s in specifiers):
            return []

        names: list[str] = []
        for specifier in specifiers:
            name = package_name_from_specifier(specifier)
            if name and name not in names:
                names.append(name)
        return names
