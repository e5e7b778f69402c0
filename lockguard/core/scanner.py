"""
LockGuard Scanner

Runs the parse-and-classify pipeline over located lockfiles and
aggregates the per-file results into a ScanReport.

Each lockfile is independent, so files may be processed by a thread
pool; results are always ordered by path.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Optional, Sequence

from lockguard.core.classifier import classify
from lockguard.core.errors import RootNotFoundError
from lockguard.core.locator import find_lockfiles
from lockguard.core.models import CompromisedDatabase, LockfileResult, ScanReport, ScanSummary
from lockguard.parsers.base import ParseResult
from lockguard.parsers.registry import parser_for

logger = logging.getLogger(__name__)


class LockfileScanner:
    """Scans lockfiles against a compromised-package database."""

    def __init__(
        self,
        database: CompromisedDatabase,
        workers: int = 1,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self.database = database
        self.workers = max(1, int(workers))
        self.cancel_event = cancel_event

    def parse_file(self, path: Path) -> ParseResult:
        """Read and parse one lockfile. Never raises for bad input."""
        parser = parser_for(path)
        if parser is None:
            return ParseResult.failure(f"no parser for {path.name}")
        if parser.skips(path.name):
            logger.debug("Skipping binary lockfile %s", path)
            return ParseResult.success(())

        try:
            content = path.read_bytes()
        except OSError as exc:
            return ParseResult.failure(f"unreadable: {exc}")

        return parser.parse(content)

    def scan_file(self, path: Path) -> tuple[Optional[LockfileResult], bool]:
        """
        Scan one lockfile.

        Returns:
            (result, ok) where result is None when the file produced no
            verdicts and ok is False when the file could not be parsed.
        """
        path = Path(path)
        parsed = self.parse_file(path)
        if not parsed.ok:
            logger.warning("Skipping %s: %s", path, parsed.error)

        verdicts = classify(parsed.pairs, self.database)
        logger.debug("%s: %d pair(s), %d verdict(s)", path, len(parsed.pairs), len(verdicts))
        if not verdicts:
            return None, parsed.ok
        return LockfileResult(path=path, packages=tuple(verdicts)), parsed.ok

    def _cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def _scan_all(self, paths: Sequence[Path]) -> list[tuple[Optional[LockfileResult], bool]]:
        if self.workers == 1 or len(paths) < 2:
            outcomes = []
            for path in paths:
                if self._cancelled():
                    logger.info("Scan cancelled")
                    break
                outcomes.append(self.scan_file(path))
            return outcomes

        def guarded(path: Path) -> tuple[Optional[LockfileResult], bool]:
            if self._cancelled():
                return None, True
            return self.scan_file(path)

        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            return list(pool.map(guarded, paths))

    def scan(self, lockfiles: Iterable[Path], root: Optional[Path] = None) -> ScanReport:
        """Scan all lockfiles and build the report."""
        paths = sorted(Path(p) for p in lockfiles)
        outcomes = self._scan_all(paths)

        results = sorted(
            (result for result, _ in outcomes if result is not None),
            key=lambda r: str(r.path),
        )
        failures = sum(1 for _, ok in outcomes if not ok)

        verdicts = [pkg for result in results for pkg in result.packages]
        summary = ScanSummary(
            total_lockfiles=len(paths),
            total_packages=len(verdicts),
            total_warnings=sum(1 for v in verdicts if v.is_warning),
            total_compromised=sum(1 for v in verdicts if v.is_affected),
            lockfiles_with_findings=len(results),
            parse_failures=failures,
        )

        root_str = str(Path(root).resolve()) if root is not None else ""
        return ScanReport(
            root=root_str,
            results=tuple(results),
            any_affected=summary.total_compromised > 0,
            any_warnings=summary.total_warnings > 0,
            summary=summary,
        )


def scan_directory(
    root: Path,
    database: CompromisedDatabase,
    managers: Iterable[str] = ("yarn", "npm", "pnpm", "bun"),
    include: Sequence[str] = (),
    exclude: Sequence[str] = (),
    workers: int = 1,
) -> ScanReport:
    """Locate and scan every lockfile under ``root``."""
    root = Path(root)
    if not root.is_dir():
        raise RootNotFoundError(root)

    lockfiles = find_lockfiles(root, managers, include, exclude)
    return LockfileScanner(database, workers=workers).scan(lockfiles, root=root)
