"""Parser registry: pick the parser for a lockfile by its exact base name."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from lockguard.parsers.base import BaseParser
from lockguard.parsers.bun import BunLockParser
from lockguard.parsers.npm import NpmLockParser
from lockguard.parsers.pnpm import PnpmLockParser
from lockguard.parsers.yarn import YarnLockParser

PARSERS: tuple[BaseParser, ...] = (
    YarnLockParser(),
    NpmLockParser(),
    PnpmLockParser(),
    BunLockParser(),
)

PARSER_REGISTRY: dict[str, BaseParser] = {
    filename: parser for parser in PARSERS for filename in parser.filenames
}


def parser_for(path: Path) -> Optional[BaseParser]:
    """Return the parser registered for ``path``'s file name, if any."""
    return PARSER_REGISTRY.get(Path(path).name)
