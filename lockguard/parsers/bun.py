"""
Parser for bun.lock (text format).

bun.lock is JSON with trailing commas allowed. Each ``packages`` entry
is an array whose first element is ``name@version``; that identifier
wins over the key, which may be ``name@version``, a bare name, or a
nested ``parent/name`` path:

    "packages": {
        "left-pad@1.3.0": ["left-pad@1.3.0", "", {}, "sha512-..."],
        "@babel/core": ["@babel/core@7.15.0", "", {...}, "sha512-..."],
        "web/@ctrl/tinycolor": ["@ctrl/tinycolor@4.1.1", "", {}, "sha512-..."],
    }

bun.lockb is a binary format. It is located but never read.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from lockguard.core.models import ResolutionPair
from lockguard.parsers.base import BaseParser, ParseResult

_LOCAL_PROTOCOLS = ("workspace:", "link:", "file:")


def strip_trailing_commas(text: str) -> str:
    """Remove commas that directly precede ``}`` or ``]``, outside strings."""
    out: list[str] = []
    in_string = False
    escaped = False
    pending_comma = -1

    for ch in text:
        if in_string:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch in "}]" and pending_comma >= 0:
            del out[pending_comma]
        if not ch.isspace():
            pending_comma = -1

        if ch == '"':
            in_string = True
        elif ch == ",":
            pending_comma = len(out)
        out.append(ch)

    return "".join(out)


def split_identifier(identifier: str) -> Optional[tuple[str, str]]:
    """``@scope/pkg@1.0.0`` -> (``@scope/pkg``, ``1.0.0``), split at the last ``@``."""
    at = identifier.rfind("@")
    if at <= 0:
        return None
    name, version = identifier[:at], identifier[at + 1:]
    if not name or not version:
        return None
    return name, version


class BunLockParser(BaseParser):
    name = "bun"
    filenames = ("bun.lock", "bun.lockb")
    binary_filenames = ("bun.lockb",)

    def parse(self, content: bytes) -> ParseResult:
        try:
            data = json.loads(strip_trailing_commas(self._decode(content)))
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
            return ParseResult.failure(f"invalid JSON: {exc}")

        if not isinstance(data, dict):
            return ParseResult.failure("top-level JSON value is not an object")

        packages = data.get("packages")
        if not isinstance(packages, dict):
            return ParseResult.success(())

        pairs: list[ResolutionPair] = []
        for key, value in packages.items():
            if not key:
                continue
            found = self._resolve_entry(key, value)
            if found is None:
                continue
            name, version = found
            if version.startswith(_LOCAL_PROTOCOLS):
                continue
            pairs.append(self._pair(name, version))
        return ParseResult.success(pairs)

    @staticmethod
    def _resolve_entry(key: str, value: Any) -> Optional[tuple[str, str]]:
        # value[0] names the installed package; nested keys such as
        # "web/@ctrl/tinycolor" only name its position in the tree
        if isinstance(value, list) and value and isinstance(value[0], str):
            found = split_identifier(value[0])
            if found is not None:
                return found
        found = split_identifier(key)
        if found is None or "/" in found[1]:
            return None
        return found
