"""
Pytest Configuration and Fixtures

Shared fixtures for LockGuard tests.
"""

import json
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from lockguard.core.database import parse_entries
from lockguard.core.models import CompromisedDatabase


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def database() -> CompromisedDatabase:
    """A small compromised-package database."""
    return parse_entries([
        "left-pad@1.3.0",
        "@scoped/package@2.0.0",
        "vulnerable-pkg@1.0.0",
        "vulnerable-pkg@1.1.0",
        "vulnerable-pkg@1.2.0",
        "vulnerable-pkg@1.3.0",
        "safe-pkg@1.0.0",
        "safe-pkg@2.1.0",
        "babel/core@7.15.0",
    ])


@pytest.fixture
def list_file(temp_dir: Path) -> Path:
    """Create a compromised-package list file."""
    path = temp_dir / "compromised.txt"
    path.write_text('''# Test list
left-pad@1.3.0
@scoped/package@2.0.0
''')
    return path


@pytest.fixture
def write_file(temp_dir: Path) -> Callable[[str, str], Path]:
    """Write a file below temp_dir, creating parent directories."""
    def _write(rel_path: str, content: str) -> Path:
        path = temp_dir / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def npm_lock(write_file) -> Path:
    """Create a package-lock.json resolving left-pad 1.3.0 and safe-pkg 2.0.0."""
    return write_file("package-lock.json", json.dumps({
        "name": "app",
        "version": "1.0.0",
        "lockfileVersion": 3,
        "packages": {
            "": {"name": "app", "version": "1.0.0"},
            "node_modules/left-pad": {"version": "1.3.0"},
            "node_modules/safe-pkg": {"version": "2.0.0"},
            "node_modules/express": {"version": "4.18.2"},
        },
    }, indent=2))


@pytest.fixture
def yarn_lock(write_file) -> Path:
    """Create a yarn.lock resolving left-pad 1.3.0 and @scoped/package 2.0.0."""
    return write_file("yarn.lock", '''# THIS IS AN AUTOGENERATED FILE. DO NOT EDIT THIS FILE DIRECTLY.
# yarn lockfile v1


left-pad@^1.3.0:
  version "1.3.0"
  resolved "https://registry.yarnpkg.com/left-pad/-/left-pad-1.3.0.tgz"

"@scoped/package@^2.0.0":
  version "2.0.0"
  resolved "https://registry.yarnpkg.com/@scoped/package/-/package-2.0.0.tgz"
''')
