"""
Parser for pnpm-lock.yaml.

Only package header lines carry what we need, so this is a line
scanner rather than a YAML parser. Two key shapes are recognized:

    /left-pad@1.3.0:
    /@babel/core/7.15.0:

Peer-dependency suffixes (``(react@18.2.0)`` or ``_react@18.2.0``) are
dropped from the version. Everything else is ignored.

Only the slash-prefixed keys of lockfile v5/v6 are recognized. Lockfile
v9 (pnpm 9+) writes ``left-pad@1.3.0:`` without the leading ``/``; such
lockfiles parse successfully but yield no pairs.
"""

from __future__ import annotations

import re

from lockguard.core.models import ResolutionPair
from lockguard.parsers.base import BaseParser, ParseResult

_PACKAGE_KEY_RE = re.compile(
    # lazy: /react-dom/18.2.0_react@18.2.0 is react-dom, not react-dom/18.2.0_react
    r"^/(?P<name>@?[^/@\s]+(?:/[^/@\s]+)??)"
    r"[@/]"
    r"(?P<version>\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.+-]*)?)"
    r"(?:\(.*\)|_\S*)?$"
)


def parse_package_key(line: str) -> ResolutionPair | None:
    """Match one ``/<name>@<version>:`` line. None for anything else."""
    line = line.strip()
    if not line.endswith(":"):
        return None
    key = line[:-1].strip().strip("'\"")
    match = _PACKAGE_KEY_RE.match(key)
    if not match:
        return None
    return ResolutionPair(match.group("name"), match.group("version"))


class PnpmLockParser(BaseParser):
    name = "pnpm"
    filenames = ("pnpm-lock.yaml",)

    def parse(self, content: bytes) -> ParseResult:
        try:
            text = self._decode(content)
        except UnicodeDecodeError as exc:
            return ParseResult.failure(f"not valid UTF-8: {exc}")

        pairs = []
        for line in text.splitlines():
            found = parse_package_key(line)
            if found:
                pairs.append(self._pair(*found))
        return ParseResult.success(pairs)
