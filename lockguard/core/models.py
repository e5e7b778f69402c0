"""
LockGuard Data Model

A PackageVerdict records one lockfile entry whose name appears in the
compromised-package database. Verdicts are grouped per lockfile into
LockfileResults, which are aggregated into a ScanReport.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Mapping, NamedTuple


class ResolutionPair(NamedTuple):
    """A (name, version) pair resolved by a lockfile."""

    name: str
    version: str


class CompromisedDatabase:
    """
    Read-only mapping of normalized package name -> compromised versions.

    Every key is normalized (scoped names always carry a leading ``@``)
    and every version set is non-empty.
    """

    def __init__(self, entries: Mapping[str, Any]) -> None:
        self._entries: dict[str, frozenset[str]] = {
            name: frozenset(versions) for name, versions in entries.items() if versions
        }

    def versions_for(self, name: str) -> frozenset[str] | None:
        return self._entries.get(name)

    @property
    def entry_count(self) -> int:
        """Total number of name@version pairs."""
        return sum(len(v) for v in self._entries.values())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"CompromisedDatabase(packages={len(self)}, versions={self.entry_count})"


@dataclass(frozen=True)
class PackageVerdict:
    name: str
    version: str
    is_affected: bool
    is_warning: bool
    affected_versions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "package": self.name,
            "version": self.version,
            "isAffected": self.is_affected,
            "isWarning": self.is_warning,
            "affectedVersions": list(self.affected_versions),
        }


@dataclass(frozen=True)
class LockfileResult:
    path: Path
    packages: tuple[PackageVerdict, ...] = ()

    @property
    def has_affected(self) -> bool:
        return any(p.is_affected for p in self.packages)

    @property
    def has_warnings(self) -> bool:
        return any(p.is_warning for p in self.packages)

    def to_dict(self) -> dict[str, Any]:
        return {
            "lockFile": str(self.path),
            "packages": [p.to_dict() for p in self.packages],
        }


@dataclass(frozen=True)
class ScanSummary:
    total_lockfiles: int = 0
    total_packages: int = 0
    total_warnings: int = 0
    total_compromised: int = 0
    lockfiles_with_findings: int = 0
    parse_failures: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalLockfiles": self.total_lockfiles,
            "totalPackages": self.total_packages,
            "totalWarnings": self.total_warnings,
            "totalCompromised": self.total_compromised,
        }


@dataclass(frozen=True)
class ScanReport:
    """Complete result of one scan run."""

    root: str
    results: tuple[LockfileResult, ...] = ()
    any_affected: bool = False
    any_warnings: bool = False
    summary: ScanSummary = field(default_factory=ScanSummary)

    def affected(self) -> Iterator[tuple[LockfileResult, PackageVerdict]]:
        for result in self.results:
            for pkg in result.packages:
                if pkg.is_affected:
                    yield result, pkg

    def warnings(self) -> Iterator[tuple[LockfileResult, PackageVerdict]]:
        for result in self.results:
            for pkg in result.packages:
                if pkg.is_warning:
                    yield result, pkg

    def to_dict(self) -> dict[str, Any]:
        """Convert the report to the JSON output structure."""
        return {
            "root": self.root,
            "results": [r.to_dict() for r in self.results],
            "anyAffected": self.any_affected,
            "anyWarnings": self.any_warnings,
            "summary": self.summary.to_dict(),
        }
