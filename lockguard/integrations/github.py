"""
LockGuard GitHub Actions Integration

Provides helpers for running LockGuard in GitHub Actions:
- Workflow annotations on the offending lockfiles
- Step summary output
- Environment detection
"""

from __future__ import annotations

import logging
import os

import click

from lockguard.core.models import ScanReport

logger = logging.getLogger(__name__)


def is_github_actions() -> bool:
    """Check if currently running inside GitHub Actions."""
    return os.environ.get("GITHUB_ACTIONS") == "true"


def emit_annotations(report: ScanReport) -> None:
    """
    Emit workflow annotations: one error per compromised package and
    one warning per package with a known-bad version elsewhere.
    """
    # GitHub annotation format:
    # ::error file={name},title={title}::{message}
    for result, pkg in report.affected():
        click.echo(
            f"::error file={result.path},title=Compromised package {pkg.name}::"
            f"{pkg.name}@{pkg.version} is a known compromised release"
        )

    for result, pkg in report.warnings():
        click.echo(
            f"::warning file={result.path},title=Watched package {pkg.name}::"
            f"{pkg.name}@{pkg.version} is safe, but compromised versions exist: "
            f"{', '.join(pkg.affected_versions)}"
        )


def write_step_summary(report: ScanReport) -> None:
    """
    Write a summary to the GitHub Actions step summary.
    This appears on the workflow run page.
    """
    summary_file = os.environ.get("GITHUB_STEP_SUMMARY")
    if not summary_file:
        return

    summary = report.summary
    lines = [
        "## LockGuard Scan Results\n",
        f"**Root:** `{report.root}`\n",
        "| Metric | Count |",
        "|--------|-------|",
        f"| Lockfiles scanned | {summary.total_lockfiles} |",
        f"| Package entries checked | {summary.total_packages} |",
        f"| Compromised packages | {summary.total_compromised} |",
        f"| Warning packages | {summary.total_warnings} |",
        "",
    ]

    if report.any_affected:
        lines.append("### Status: FAILED")
        lines.append("Compromised packages must be removed before merging.")
        lines.append("")
        for result, pkg in report.affected():
            lines.append(f"- `{pkg.name}@{pkg.version}` in `{result.path}`")
    elif report.any_warnings:
        lines.append("### Status: WARNINGS")
        lines.append("Resolved versions are safe, but compromised versions exist.")
    else:
        lines.append("### Status: PASSED")
        lines.append("No compromised packages found.")

    try:
        with open(summary_file, "a", encoding="utf-8") as fh:
            fh.write("\n".join(lines) + "\n")
    except OSError as exc:
        logger.warning("Could not write step summary to %s: %s", summary_file, exc)
