"""
LockGuard Classification

Joins resolved (name, version) pairs against the compromised database:

- name known, version listed      -> affected
- name known, version not listed  -> warning
- name unknown                    -> dropped (no verdict)

Name matching is exact and case-sensitive.
"""

from __future__ import annotations

from typing import Iterable

from lockguard.core.models import CompromisedDatabase, PackageVerdict, ResolutionPair


def classify_pair(pair: ResolutionPair, database: CompromisedDatabase) -> PackageVerdict | None:
    known = database.versions_for(pair.name)
    if not known:
        return None

    is_affected = pair.version in known
    return PackageVerdict(
        name=pair.name,
        version=pair.version,
        is_affected=is_affected,
        is_warning=not is_affected,
        affected_versions=tuple(sorted(known)),
    )


def classify(
    pairs: Iterable[ResolutionPair],
    database: CompromisedDatabase,
) -> list[PackageVerdict]:
    """
    Classify resolution pairs from one lockfile.

    Repeated pairs (the same name@version seen twice in one lockfile)
    yield a single verdict, in order of first appearance. Verdict
    counts, and so ``ScanSummary.total_packages``, are therefore counts
    of distinct pairs per lockfile, not of lockfile entries: two nested
    npm copies of ``debug@4.4.2`` give one verdict.
    """
    verdicts: list[PackageVerdict] = []
    seen: set[ResolutionPair] = set()

    for pair in pairs:
        if pair in seen:
            continue
        seen.add(pair)

        verdict = classify_pair(pair, database)
        if verdict is not None:
            verdicts.append(verdict)

    return verdicts
