"""
LockGuard Lockfile Locator

Walks a directory tree and collects the lockfiles written by the
requested package managers, filtered by include/exclude globs.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Sequence

from lockguard.core.errors import InvalidManagerError, RootNotFoundError
from lockguard.core.pathfilter import is_included, matches_glob, relative_posix

logger = logging.getLogger(__name__)

MANAGER_LOCKFILES: dict[str, tuple[str, ...]] = {
    "yarn": ("yarn.lock",),
    "npm": ("package-lock.json", "npm-shrinkwrap.json"),
    "pnpm": ("pnpm-lock.yaml",),
    "bun": ("bun.lock", "bun.lockb"),
}

VALID_MANAGERS: tuple[str, ...] = tuple(MANAGER_LOCKFILES)

DEFAULT_EXCLUDES: list[str] = [
    "**/node_modules/**",
    "**/.pnpm-store/**",
    "**/dist/**",
    "**/build/**",
    "**/tmp/**",
    "**/.turbo/**",
]


def lockfile_names(managers: Iterable[str]) -> set[str]:
    """Return the lockfile base names for the given package managers."""
    names: set[str] = set()
    seen = False
    for manager in managers:
        seen = True
        if manager not in MANAGER_LOCKFILES:
            raise InvalidManagerError(manager, VALID_MANAGERS)
        names.update(MANAGER_LOCKFILES[manager])

    if not seen:
        raise InvalidManagerError("", VALID_MANAGERS)
    return names


def _prune_dir(rel_dir: str, exclude: Sequence[str]) -> bool:
    """True when every file below ``rel_dir`` would be excluded anyway."""
    probe = f"{rel_dir}/_"
    return any(p.endswith("/**") and matches_glob(probe, p) for p in exclude)


def find_lockfiles(
    root: Path,
    managers: Iterable[str],
    include: Sequence[str] = (),
    exclude: Sequence[str] = (),
) -> list[Path]:
    """
    Find lockfiles under ``root``.

    Unreadable directories are logged and skipped; they never abort the
    walk.

    Returns:
        Absolute lockfile paths, sorted.
    """
    root = Path(root)
    if not root.is_dir():
        raise RootNotFoundError(root)

    names = lockfile_names(managers)
    root = root.resolve()
    lockfiles: list[Path] = []

    def onerror(exc: OSError) -> None:
        logger.warning("Unable to access directory %s: %s", exc.filename or root, exc)

    for dirpath, dirnames, filenames in os.walk(root, onerror=onerror, followlinks=False):
        kept = []
        for dirname in sorted(dirnames):
            rel = relative_posix(os.path.join(dirpath, dirname), root)
            if rel is not None and _prune_dir(rel, exclude):
                logger.debug("Pruning excluded directory %s", rel)
                continue
            kept.append(dirname)
        dirnames[:] = kept

        for filename in filenames:
            if filename not in names:
                continue
            full_path = os.path.join(dirpath, filename)
            if not os.path.isfile(full_path):
                continue
            if is_included(full_path, root, include, exclude):
                lockfiles.append(Path(full_path))

    lockfiles.sort()
    logger.info("Found %d lockfile(s) under %s", len(lockfiles), root)
    return lockfiles
