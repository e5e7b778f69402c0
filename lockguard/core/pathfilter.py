"""
LockGuard Path Filter

Decides whether a located lockfile should be scanned, given include and
exclude glob lists. Paths are matched relative to the scan root with
``/`` separators.

Supported glob dialect (deliberately small):
- ``**/X/**``  path contains the directory segment ``X``
- ``P/**``     path is ``P`` or lies under ``P/``
- ``**/S``     ``S`` occurs at a path boundary
- otherwise    ``**`` matches anything, ``*`` matches within one segment

Character classes, brace expansion and ``?`` are not supported.
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Sequence, Union

PathLike = Union[str, "os.PathLike[str]"]


def _is_literal(text: str) -> bool:
    return "*" not in text


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    regex = re.escape(pattern)
    regex = regex.replace(r"\*\*", ".*")
    regex = regex.replace(r"\*", "[^/]*")
    return re.compile("^" + regex + "$")


def matches_glob(path: str, pattern: str) -> bool:
    """Match a ``/``-separated relative path against one glob pattern."""
    if pattern.startswith("**/") and pattern.endswith("/**"):
        segment = pattern[3:-3]
        if segment and _is_literal(segment):
            return path.startswith(segment + "/") or f"/{segment}/" in path

    if pattern.endswith("/**"):
        prefix = pattern[:-3]
        if _is_literal(prefix):
            return path.startswith(prefix + "/") or path == prefix.rstrip("/")

    if pattern.startswith("**/"):
        suffix = pattern[3:]
        if _is_literal(suffix):
            return path.startswith(suffix) or ("/" + suffix) in path

    return _compile(pattern).match(path) is not None


def relative_posix(full_path: PathLike, root_dir: PathLike) -> str | None:
    """Return ``full_path`` relative to ``root_dir`` with ``/`` separators."""
    try:
        rel = os.path.relpath(os.fspath(full_path), os.fspath(root_dir))
    except ValueError:
        # different drives on Windows
        return None
    return Path(rel).as_posix()


def is_included(
    full_path: PathLike,
    root_dir: PathLike,
    include: Sequence[str] = (),
    exclude: Sequence[str] = (),
) -> bool:
    """
    Check a path against include/exclude globs.

    Excludes are evaluated first and always win. With no include
    patterns every non-excluded path is included.
    """
    rel = relative_posix(full_path, root_dir)
    if rel is None:
        return False

    if any(matches_glob(rel, pattern) for pattern in exclude):
        return False

    if include:
        return any(matches_glob(rel, pattern) for pattern in include)

    return True
