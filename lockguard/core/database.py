"""
LockGuard Compromised Package Database

Loads ``name@version`` lists into a CompromisedDatabase. Lists are
human-curated text: blank lines, ``#`` comments and free-text lines
that don't look like ``name@version`` are skipped.

A bundled default list ships with the package and is used when no
external list is given, or when the external list fails to load.
"""

from __future__ import annotations

import logging
import re
from importlib import resources
from pathlib import Path
from typing import Iterable, Optional

from lockguard.core.errors import (
    DatabaseError,
    DatabaseNotFoundError,
    DatabaseReadError,
    EmptyDatabaseError,
)
from lockguard.core.models import CompromisedDatabase

logger = logging.getLogger(__name__)

EMBEDDED_LIST = "compromised_packages.txt"
EMBEDDED_SOURCE = "embedded package list"

# name: simple, scope/simple or @scope/simple
# version: 3 or 4 numeric parts, optional pre-release / build tail
ENTRY_RE = re.compile(
    r"^(?P<name>@?[^@/\s]+(?:/[^@/\s]+)?)"
    r"@(?P<version>\d+\.\d+\.\d+(?:\.\d+)?(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?)$"
)


def normalize_name(name: str) -> str:
    """Give scoped names their leading ``@`` (``babel/core`` -> ``@babel/core``)."""
    if "/" in name and not name.startswith("@"):
        return "@" + name
    return name


def parse_entries(lines: Iterable[str]) -> CompromisedDatabase:
    """Parse ``name@version`` lines into a database. Invalid lines are skipped."""
    entries: dict[str, set[str]] = {}

    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        match = ENTRY_RE.match(line)
        if not match:
            logger.debug("Skipping line %d: %r", line_no, line)
            continue

        name = normalize_name(match.group("name"))
        entries.setdefault(name, set()).add(match.group("version"))

    return CompromisedDatabase(entries)


def load_database(path: Path) -> CompromisedDatabase:
    """
    Load a compromised-package list from a file.

    Raises:
        DatabaseNotFoundError: the file does not exist.
        DatabaseReadError: the file exists but could not be read.
        EmptyDatabaseError: no valid entries were found.
    """
    path = Path(path)
    if not path.exists():
        raise DatabaseNotFoundError(path)

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DatabaseReadError(path, str(exc)) from exc

    database = parse_entries(content.splitlines())
    if not len(database):
        raise EmptyDatabaseError(str(path))

    logger.info("Loaded %d compromised versions of %d packages from %s",
                database.entry_count, len(database), path)
    return database


def embedded_list_text() -> str:
    """Return the text of the bundled default list."""
    return resources.files("lockguard").joinpath("data", EMBEDDED_LIST).read_text(
        encoding="utf-8"
    )


def load_embedded_database(text: Optional[str] = None) -> CompromisedDatabase:
    """Parse the bundled default list (or ``text``, when given)."""
    if text is None:
        try:
            text = embedded_list_text()
        except (OSError, UnicodeDecodeError) as exc:
            raise DatabaseReadError(EMBEDDED_SOURCE, str(exc)) from exc

    database = parse_entries(text.splitlines())
    if not len(database):
        raise EmptyDatabaseError(EMBEDDED_SOURCE)
    return database


def resolve_database(
    path: Optional[Path] = None,
    embedded_text: Optional[str] = None,
) -> tuple[CompromisedDatabase, str]:
    """
    Load the database for a run.

    An external list is tried first. If it fails, the embedded list is
    tried exactly once; an embedded failure propagates.

    Returns:
        (database, source) where source names the list actually used.
    """
    if path is not None:
        try:
            return load_database(path), str(path)
        except DatabaseError as exc:
            logger.warning("Failed to load external packages file '%s': %s", path, exc)
            logger.warning("Falling back to %s", EMBEDDED_SOURCE)

    return load_embedded_database(embedded_text), EMBEDDED_SOURCE
