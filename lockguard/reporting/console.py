"""
LockGuard Console Reporter

Generates human-readable colored console output: overall status,
compromised packages, warning packages and the scan summary.
"""

from __future__ import annotations

import sys
from typing import Optional

import click

from lockguard.core.models import ScanReport


def _safe_echo(text: str = "", **kwargs) -> None:
    """Echo text, handling Unicode issues on Windows consoles."""
    try:
        click.echo(text, **kwargs)
    except UnicodeEncodeError:
        safe = text.encode(sys.stdout.encoding or "utf-8", errors="replace").decode(
            sys.stdout.encoding or "utf-8", errors="replace"
        )
        click.echo(safe, **kwargs)


RULE = "=" * 63


class ConsoleReporter:
    """Prints a formatted scan report to the console."""

    def __init__(
        self,
        target: str,
        no_color: bool = False,
        quiet: bool = False,
        only_affected: bool = False,
        summary_only: bool = False,
    ) -> None:
        self.target = target
        self.no_color = no_color
        self.quiet = quiet
        self.only_affected = only_affected
        self.summary_only = summary_only

    def _style(self, text: str, **styles) -> str:
        if self.no_color:
            return text
        return click.style(text, **styles)

    def _line(self, text: str = "", **styles) -> None:
        _safe_echo(self._style(text, **styles) if text else "")

    def report(self, report: ScanReport, elapsed: Optional[float] = None) -> None:
        """
        Print the full scan report.

        Args:
            report: The completed scan.
            elapsed: Scan duration in seconds, shown in the footer.
        """
        if self.summary_only:
            self._print_summary(report)
            return

        if not self.quiet:
            self._line(RULE, fg="bright_blue")
            self._line("  LockGuard Scan Results", fg="cyan", bold=True)
            self._line(f"  Target: {self.target}", fg="white")
            self._line(RULE, fg="bright_blue")

        self._print_status(report)
        self._print_affected(report)
        if not self.only_affected:
            self._print_warnings(report)
        self._print_summary(report)

        if not self.quiet and elapsed is not None:
            self._line(RULE, fg="bright_blue")
            self._line(f"  Scan completed in {elapsed:.3f}s", fg="cyan")
            self._line(RULE, fg="bright_blue")

    def _print_status(self, report: ScanReport) -> None:
        if report.any_affected:
            self._line("[X] SECURITY ISSUE FOUND!", fg="red", bold=True)
            self._line("Compromised packages detected - immediate action required", fg="red")
        elif report.any_warnings and not self.only_affected:
            self._line("[!] VULNERABILITY WARNING", fg="yellow", bold=True)
            self._line("Current versions are SAFE, but vulnerable versions exist", fg="yellow")
        else:
            self._line("[OK] SCAN PASSED", fg="green", bold=True)
            self._line("No security issues detected", fg="green")
        self._line()

    def _print_affected(self, report: ScanReport) -> None:
        entries = list(report.affected())
        if not entries:
            return
        self._line("Compromised packages:", fg="red", bold=True)
        for result, pkg in entries:
            self._line(f"  {pkg.name}@{pkg.version}", fg="red")
            self._line(f"    in: {result.path}", fg="bright_black")
            if pkg.affected_versions:
                self._line(f"    affected: {', '.join(pkg.affected_versions)}", fg="red")
        self._line()

    def _print_warnings(self, report: ScanReport) -> None:
        entries = list(report.warnings())
        if not entries:
            return
        self._line("Packages with vulnerable versions:", fg="yellow", bold=True)
        for result, pkg in entries:
            self._line(f"  {pkg.name}@{pkg.version} (current version is safe)", fg="yellow")
            self._line(f"    in: {result.path}", fg="bright_black")
            if pkg.affected_versions:
                self._line(f"    vulnerable: {', '.join(pkg.affected_versions)}", fg="yellow")
        self._line()

    def _print_summary(self, report: ScanReport) -> None:
        summary = report.summary
        self._line("Scan Summary:", fg="cyan", bold=True)
        self._line(f"   Lockfiles scanned: {summary.total_lockfiles}", fg="white")
        self._line(f"   Package entries checked: {summary.total_packages}", fg="white")
        if summary.parse_failures:
            self._line(f"   Unparseable lockfiles: {summary.parse_failures}", fg="yellow")

        if summary.total_compromised:
            self._line(f"   Compromised packages: {summary.total_compromised}", fg="red")
        else:
            self._line("   Compromised packages: 0", fg="green")

        if summary.total_warnings:
            self._line(f"   Warning packages: {summary.total_warnings}", fg="yellow")
        else:
            self._line("   Warning packages: 0", fg="green")
