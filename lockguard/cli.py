"""
LockGuard CLI

Command-line interface for scanning lockfiles.

Commands:
    lockguard scan [ROOT]   - Scan lockfiles under ROOT for compromised packages
    lockguard init          - Create a default .lockguard.yaml

Exit codes:
    0  scan finished, nothing compromised
    1  invalid input (missing root, bad manager, unusable package list)
    2  compromised packages found
"""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Iterable, Optional

import click

from lockguard import __version__
from lockguard.core.config import CONFIG_FILENAME, LockGuardConfig, generate_default_config
from lockguard.core.database import resolve_database
from lockguard.core.errors import InputValidationError, RootNotFoundError
from lockguard.core.locator import find_lockfiles, lockfile_names
from lockguard.core.log import setup_logging
from lockguard.core.models import ScanReport
from lockguard.core.scanner import LockfileScanner
from lockguard.integrations.github import emit_annotations, is_github_actions, write_step_summary
from lockguard.reporting.console import ConsoleReporter, _safe_echo
from lockguard.reporting.json_reporter import JSONReporter

EXIT_OK = 0
EXIT_INVALID_INPUT = 1
EXIT_COMPROMISED = 2


def split_csv(values: Iterable[str]) -> list[str]:
    """Split comma-separated option values into a flat, trimmed list."""
    result = []
    for value in values:
        result.extend(part.strip() for part in value.split(",") if part.strip())
    return result


@click.group()
@click.version_option(version=__version__, prog_name="LockGuard")
def cli() -> None:
    """
    LockGuard - Compromised npm package scanner

    Scan yarn, npm, pnpm and bun lockfiles for packages that match a
    list of known-compromised releases.
    """
    pass


# ═══════════════════════════════════════════════════════
#  lockguard scan
# ═══════════════════════════════════════════════════════
@cli.command()
@click.argument("root", type=click.Path(), default=".")
@click.option("--list-path", type=click.Path(), default=None,
              help="Compromised package list (name@version per line). Defaults to the embedded list.")
@click.option("--managers", default=None,
              help="Package managers to scan, comma-separated (default: yarn,npm,pnpm,bun).")
@click.option("--include", multiple=True, help="Include glob patterns (comma-separated).")
@click.option("--exclude", multiple=True,
              help="Exclude glob patterns (comma-separated). Replaces the defaults.")
@click.option("--only-affected", is_flag=True, help="Show only compromised packages.")
@click.option("--summary", "summary_only", is_flag=True, help="Show only the summary.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--no-color", is_flag=True, help="Disable colored output.")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
@click.option("--json-path", type=click.Path(), default=None, help="Write the JSON report to a file.")
@click.option("--workers", type=click.IntRange(min=1), default=None,
              help="Lockfiles parsed in parallel (default: 1).")
@click.option("--ci", is_flag=True, help="Enable CI mode (GitHub Actions annotations, etc.).")
@click.option("--config", "config_path", type=click.Path(), default=None,
              help="Path to .lockguard.yaml configuration file.")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"],
              case_sensitive=False), default=None, help="Logging verbosity (stderr).")
def scan(
    root: str,
    list_path: Optional[str],
    managers: Optional[str],
    include: tuple,
    exclude: tuple,
    only_affected: bool,
    summary_only: bool,
    quiet: bool,
    no_color: bool,
    as_json: bool,
    json_path: Optional[str],
    workers: Optional[int],
    ci: bool,
    config_path: Optional[str],
    log_level: Optional[str],
) -> None:
    """Scan lockfiles under ROOT for compromised packages.

    Examples:

        lockguard scan

        lockguard scan ./monorepo --managers yarn,pnpm --json

        lockguard scan --list-path compromised.txt --only-affected --ci
    """
    started = time.time()
    target = Path(root)

    # ── Load configuration ──
    cfg_path = Path(config_path) if config_path else target / CONFIG_FILENAME
    config = LockGuardConfig.load(cfg_path)
    setup_logging(log_level or config.log_level)

    # CLI flags override config
    manager_list = split_csv([managers]) if managers is not None else config.managers
    include_list = split_csv(include) if include else config.include
    exclude_list = split_csv(exclude) if exclude else config.exclude
    list_file = list_path or config.list_path
    out_json = json_path or config.output.json_path
    plain = no_color or config.output.no_color

    try:
        if not target.is_dir():
            raise RootNotFoundError(root)
        lockfile_names(manager_list)
        database, _source = resolve_database(Path(list_file) if list_file else None)
        lockfiles = find_lockfiles(target, manager_list, include_list, exclude_list)
    except InputValidationError as exc:
        _safe_echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_INVALID_INPUT)

    scanner = LockfileScanner(database, workers=workers or config.workers)
    report = scanner.scan(lockfiles, root=target)
    elapsed = time.time() - started

    if not lockfiles and not as_json:
        _safe_echo(f"No lockfiles found under: {target}")
        sys.exit(EXIT_OK)

    # ── Report ──
    json_reporter = JSONReporter(report)
    if as_json or out_json:
        json_str = json_reporter.render()
        if as_json:
            _safe_echo(json_str)
        if out_json:
            try:
                json_reporter.write(out_json, json_str)
            except OSError as exc:
                _safe_echo(f"Error writing JSON file: {exc}", err=True)
                sys.exit(EXIT_INVALID_INPUT)

    if not as_json:
        console = ConsoleReporter(
            target=report.root,
            no_color=plain,
            quiet=quiet,
            only_affected=only_affected,
            summary_only=summary_only,
        )
        console.report(report, elapsed=elapsed)

    # ── CI integrations ──
    if ci or is_github_actions():
        emit_annotations(report)
        write_step_summary(report)

    # ── Exit code ──
    sys.exit(exit_code(report))


def exit_code(report: ScanReport) -> int:
    return EXIT_COMPROMISED if report.any_affected else EXIT_OK


# ═══════════════════════════════════════════════════════
#  lockguard init
# ═══════════════════════════════════════════════════════
@cli.command()
@click.option("--path", "-p", "target_path", type=click.Path(), default=".",
              help="Directory to create the config file in.")
def init(target_path: str) -> None:
    """Create a default .lockguard.yaml."""
    target = Path(target_path).resolve()
    target.mkdir(parents=True, exist_ok=True)

    config_file = target / CONFIG_FILENAME

    if config_file.exists():
        _safe_echo(click.style(f"  [!] {config_file} already exists, skipping.", fg="yellow"))
    else:
        config_file.write_text(generate_default_config(), encoding="utf-8")
        _safe_echo(click.style(f"  [+] Created {config_file}", fg="green"))

    _safe_echo("")
    _safe_echo("  Edit this file to customize which lockfiles are scanned.")
    _safe_echo("  Run 'lockguard scan' to start scanning.")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
