"""
LockGuard Configuration Management

Loads and manages configuration from .lockguard.yaml files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from lockguard.core.locator import DEFAULT_EXCLUDES, VALID_MANAGERS

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".lockguard.yaml"


@dataclass
class OutputConfig:
    json_path: Optional[str] = None
    no_color: bool = False


@dataclass
class LockGuardConfig:
    """Root configuration object for LockGuard."""

    list_path: Optional[str] = None
    managers: list[str] = field(default_factory=lambda: list(VALID_MANAGERS))
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDES))
    workers: int = 1
    log_level: str = "WARNING"
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "LockGuardConfig":
        """Load configuration from a YAML file, falling back to defaults."""
        if config_path is None:
            # Search in current directory
            config_path = Path.cwd() / CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
            return cls()

        if not isinstance(raw, dict):
            logger.warning("Ignoring config %s: expected a mapping", config_path)
            return cls()

        return cls._from_dict(raw)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "LockGuardConfig":
        """Build config from a parsed YAML dictionary."""
        defaults = cls()

        output_data = data.get("output") or {}
        if not isinstance(output_data, dict):
            output_data = {}
        output = OutputConfig(
            json_path=_str_or_none(output_data.get("json_path")),
            no_color=bool(output_data.get("no_color", False)),
        )

        workers = data.get("workers", defaults.workers)
        if not isinstance(workers, int) or isinstance(workers, bool) or workers < 1:
            workers = defaults.workers

        return cls(
            list_path=_str_or_none(data.get("list_path")),
            managers=_str_list(data.get("managers"), defaults.managers),
            include=_str_list(data.get("include"), defaults.include),
            exclude=_str_list(data.get("exclude"), defaults.exclude),
            workers=workers,
            log_level=str(data.get("log_level") or defaults.log_level),
            output=output,
        )


def _str_or_none(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _str_list(value: Any, default: list[str]) -> list[str]:
    if value is None:
        return list(default)
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list):
        return list(default)
    return [str(v).strip() for v in value if str(v).strip()]


def generate_default_config() -> str:
    """Generate a default .lockguard.yaml configuration file content."""
    return """\
# LockGuard Configuration

# External compromised package list (name@version per line).
# The embedded list is used when unset or unreadable.
# list_path: compromised-packages.txt

# Package managers whose lockfiles are scanned
managers:
  - yarn
  - npm
  - pnpm
  - bun

# Only scan lockfiles matching these globs (empty = everything)
include: []

# Never scan lockfiles matching these globs
exclude:
  - "**/node_modules/**"
  - "**/.pnpm-store/**"
  - "**/dist/**"
  - "**/build/**"
  - "**/tmp/**"
  - "**/.turbo/**"

# Lockfiles parsed in parallel
workers: 1

log_level: WARNING

# Output settings
output:
  # json_path: lockguard-report.json
  no_color: false
"""
